"""開票速報の値オブジェクト — Domain layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ContestKind(str, Enum):
    """選挙種別."""

    COUNCIL = "council"  # 議員選挙（複数議席・比例配分）
    EXECUTIVE = "executive"  # 首長選挙（1議席）


@dataclass(frozen=True)
class CandidateRecord:
    """候補者1名分の得票データ.

    スナップショットごとに正規化器が生成し、以後変更しない。
    """

    candidate_id: str
    name: str
    party_code: str
    votes: int
    vote_percentage: float
    portrait_url: str = ""


@dataclass(frozen=True)
class ContestSnapshot:
    """ある時点での1選挙分の集計結果."""

    contest_kind: ContestKind
    seats_available: int
    candidates: tuple[CandidateRecord, ...] = field(default_factory=tuple)
    percent_totalized: float = 0.0
    snapshot_timestamp: str = ""  # 上流の表示文字列をそのまま保持

    @property
    def total_votes(self) -> int:
        """全候補者の得票合計."""
        return sum(c.votes for c in self.candidates)


@dataclass(frozen=True)
class ConstituencyInfo:
    """選挙区名簿の1エントリ."""

    constituency_id: str
    name: str
    region: str
