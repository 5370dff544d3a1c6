"""開票速報ボード・議席配分照会のDTO."""

from __future__ import annotations

from dataclasses import dataclass, field

from src.domain.value_objects.apportionment_result import (
    ApportionmentMethod,
    PartyApportionmentResult,
)
from src.domain.value_objects.tally import CandidateRecord


NOT_YET_COMPUTABLE = "議席配分はまだ計算できません"


@dataclass(frozen=True)
class ApportionmentOutputDto:
    """議席配分照会の出力DTO.

    計算できない場合も例外にせず computable=False で返す。
    """

    constituency_id: str
    method: ApportionmentMethod
    computable: bool
    seats_available: int = 0
    results: list[PartyApportionmentResult] = field(default_factory=list)
    message: str | None = None


@dataclass(frozen=True)
class ConstituencyBoardDto:
    """画面表示用の選挙区1件分のデータ."""

    constituency_id: str
    display_name: str
    region: str
    percent_totalized: float | None
    snapshot_timestamp: str
    candidate_search: str
    party_filter: str | None
    council_candidates: list[CandidateRecord]
    executive_candidates: list[CandidateRecord]
    party_options: list[str]
    apportionment: ApportionmentOutputDto
