"""開票速報ボード生成ユースケース.

追跡中の全選挙区について、画面表示に必要なデータ
（絞り込み済み候補者・政党選択肢・議席配分）を組み立てる。
"""

from src.application.dtos.tally_board_dto import ConstituencyBoardDto
from src.application.usecases.query_apportionment_usecase import (
    QueryApportionmentUseCase,
)
from src.domain.entities.constituency_state import ConstituencyState
from src.domain.repositories.constituency_state_repository import (
    ConstituencyStateRepository,
)
from src.domain.services.candidate_filter_service import CandidateFilterService
from src.domain.value_objects.apportionment_result import ApportionmentMethod


class TallyBoardUseCase:
    """開票速報ボードのユースケース."""

    def __init__(
        self,
        repository: ConstituencyStateRepository,
        default_method: ApportionmentMethod = ApportionmentMethod.LARGEST_REMAINDER,
    ) -> None:
        self._repo = repository
        self._default_method = default_method

    async def execute(
        self, method: ApportionmentMethod | None = None
    ) -> list[ConstituencyBoardDto]:
        """追跡順に選挙区のボードデータを返す."""
        method = method or self._default_method
        states = await self._repo.list_all()
        return [self._to_dto(state, method) for state in states]

    @staticmethod
    def _to_dto(
        state: ConstituencyState, method: ApportionmentMethod
    ) -> ConstituencyBoardDto:
        council = state.council.candidates if state.council else ()
        executive = state.executive.candidates if state.executive else ()

        return ConstituencyBoardDto(
            constituency_id=state.constituency_id,
            display_name=state.display_name,
            region=state.region,
            percent_totalized=(
                state.council.percent_totalized if state.council else None
            ),
            snapshot_timestamp=(
                state.council.snapshot_timestamp if state.council else ""
            ),
            candidate_search=state.candidate_search,
            party_filter=state.party_filter,
            council_candidates=CandidateFilterService.filter(
                council, state.candidate_search, state.party_filter
            ),
            executive_candidates=list(executive),
            party_options=CandidateFilterService.party_codes(council),
            apportionment=QueryApportionmentUseCase.compute(
                state.constituency_id, state.council, method
            ),
        )
