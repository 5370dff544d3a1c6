"""ConstituencyState repository interface."""

from abc import ABC, abstractmethod

from src.domain.entities.constituency_state import ConstituencyState
from src.domain.value_objects.tally import (
    ConstituencyInfo,
    ContestKind,
    ContestSnapshot,
)


class ConstituencyStateRepository(ABC):
    """Repository interface for tracked constituencies."""

    @abstractmethod
    async def add(self, info: ConstituencyInfo) -> ConstituencyState:
        """選挙区の追跡を開始する.

        既に追跡中の場合は既存レコードをそのまま返す。
        """
        pass

    @abstractmethod
    async def upsert(
        self,
        constituency_id: str,
        contest_kind: ContestKind,
        snapshot: ContestSnapshot,
        *,
        info: ConstituencyInfo | None = None,
    ) -> bool:
        """スナップショットをマージする.

        Args:
            constituency_id: 選挙区ID
            contest_kind: 置き換えるスロットの選挙種別
            snapshot: 新しいスナップショット
            info: 未追跡時にレコードを作成するための名簿情報

        Returns:
            マージした場合True。未追跡かつinfo未指定の場合False。
        """
        pass

    @abstractmethod
    async def remove(self, constituency_id: str) -> None:
        """追跡を終了する（未追跡でもエラーにしない）."""
        pass

    @abstractmethod
    async def set_search(self, constituency_id: str, text: str) -> None:
        """候補者検索文字列を設定する（未追跡なら何もしない）."""
        pass

    @abstractmethod
    async def set_party_filter(
        self, constituency_id: str, party_code: str | None
    ) -> None:
        """政党フィルタを設定する（未追跡なら何もしない）."""
        pass

    @abstractmethod
    async def get(self, constituency_id: str) -> ConstituencyState | None:
        """選挙区を取得する."""
        pass

    @abstractmethod
    async def list_all(self) -> list[ConstituencyState]:
        """追跡中の全選挙区を追加順で取得する."""
        pass

    @abstractmethod
    async def list_ids(self) -> list[str]:
        """追跡中の選挙区IDを追加順で取得する."""
        pass
