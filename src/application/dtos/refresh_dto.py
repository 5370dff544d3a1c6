"""開票速報ポーリング関連のDTO."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from src.domain.value_objects.tally import ContestKind


class RefreshStatus(str, Enum):
    """1選挙区分の更新結果."""

    SUCCESS = "success"  # 両選挙とも取得・マージ済み
    PARTIAL = "partial"  # 片方のみ成功
    FAILED = "failed"  # 両方失敗
    SKIPPED = "skipped"  # 取得中のため / 名簿に存在しないためスキップ


@dataclass(frozen=True)
class ContestRefreshOutcome:
    """1選挙分の取得・マージ結果."""

    contest_kind: ContestKind
    merged: bool
    failed: bool = False
    error_message: str | None = None


@dataclass
class ConstituencyRefreshResult:
    """1選挙区分の更新結果."""

    constituency_id: str
    status: RefreshStatus
    outcomes: list[ContestRefreshOutcome] = field(default_factory=list)
    skip_reason: str | None = None

    @property
    def errors(self) -> list[str]:
        return [
            f"{o.contest_kind.value}: {o.error_message}"
            for o in self.outcomes
            if o.failed
        ]


@dataclass
class RefreshCycleReport:
    """1回のポーリングサイクル全体の結果."""

    results: list[ConstituencyRefreshResult] = field(default_factory=list)

    def count(self, status: RefreshStatus) -> int:
        return sum(1 for r in self.results if r.status is status)

    @property
    def has_failures(self) -> bool:
        return any(
            r.status in (RefreshStatus.FAILED, RefreshStatus.PARTIAL)
            for r in self.results
        )
