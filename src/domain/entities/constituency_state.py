"""ConstituencyState entity."""

from __future__ import annotations

from dataclasses import dataclass

from src.domain.value_objects.tally import ContestKind, ContestSnapshot


@dataclass
class ConstituencyState:
    """追跡中の選挙区1件分の集約レコード.

    議員選挙・首長選挙それぞれの最新スナップショットと、
    画面側が保持する検索文字列・政党フィルタを持つ。
    スナップショットのマージはUI状態に一切触れない。
    """

    constituency_id: str
    display_name: str
    region: str
    council: ContestSnapshot | None = None
    executive: ContestSnapshot | None = None
    candidate_search: str = ""
    party_filter: str | None = None

    def snapshot_for(self, contest_kind: ContestKind) -> ContestSnapshot | None:
        """選挙種別に対応するスナップショットを返す."""
        if contest_kind is ContestKind.COUNCIL:
            return self.council
        return self.executive

    def merge_snapshot(self, snapshot: ContestSnapshot) -> None:
        """種別が一致するスロットのみを置き換える."""
        if snapshot.contest_kind is ContestKind.COUNCIL:
            self.council = snapshot
        else:
            self.executive = snapshot

    def __str__(self) -> str:
        """文字列表現を返す."""
        return f"{self.display_name} - {self.region}"
