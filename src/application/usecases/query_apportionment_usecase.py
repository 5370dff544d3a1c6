"""議席配分照会ユースケース.

リポジトリに保持された議員選挙スナップショットから、呼び出しのたびに
議席配分を計算し直す（結果はキャッシュしない）。
"""

import logging

from src.application.dtos.tally_board_dto import (
    NOT_YET_COMPUTABLE,
    ApportionmentOutputDto,
)
from src.domain.exceptions import DegenerateApportionmentError
from src.domain.repositories.constituency_state_repository import (
    ConstituencyStateRepository,
)
from src.domain.services.apportionment_service import ApportionmentService
from src.domain.value_objects.apportionment_result import ApportionmentMethod
from src.domain.value_objects.tally import ContestSnapshot


logger = logging.getLogger(__name__)


class QueryApportionmentUseCase:
    """選挙区の議席配分を照会するユースケース."""

    def __init__(
        self,
        repository: ConstituencyStateRepository,
        default_method: ApportionmentMethod = ApportionmentMethod.LARGEST_REMAINDER,
    ) -> None:
        self._repo = repository
        self._default_method = default_method

    async def execute(
        self,
        constituency_id: str,
        method: ApportionmentMethod | None = None,
    ) -> ApportionmentOutputDto:
        """議席配分を計算する."""
        method = method or self._default_method
        state = await self._repo.get(constituency_id)
        council = state.council if state is not None else None
        return self.compute(constituency_id, council, method)

    @staticmethod
    def compute(
        constituency_id: str,
        council: ContestSnapshot | None,
        method: ApportionmentMethod,
    ) -> ApportionmentOutputDto:
        """スナップショットから配分を計算する（計算不能時は computable=False）."""
        if council is None:
            return ApportionmentOutputDto(
                constituency_id=constituency_id,
                method=method,
                computable=False,
                message=f"{NOT_YET_COMPUTABLE}（議員選挙データ未取得）",
            )

        try:
            results = ApportionmentService.apportion_snapshot(council, method)
        except DegenerateApportionmentError as e:
            logger.info("議席配分を計算できません: %s: %s", constituency_id, e)
            return ApportionmentOutputDto(
                constituency_id=constituency_id,
                method=method,
                computable=False,
                seats_available=council.seats_available,
                message=f"{NOT_YET_COMPUTABLE}（{e}）",
            )

        return ApportionmentOutputDto(
            constituency_id=constituency_id,
            method=method,
            computable=True,
            seats_available=council.seats_available,
            results=results,
        )
