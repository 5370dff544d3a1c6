"""選挙区名簿サービスのインターフェース."""

from __future__ import annotations

from typing import Protocol

from src.domain.value_objects.tally import ConstituencyInfo


class IConstituencyDirectoryService(Protocol):
    """選挙区IDから名称・地域を引く名簿のインターフェース."""

    def resolve(self, constituency_id: str) -> ConstituencyInfo:
        """選挙区IDを解決する.

        Raises:
            ConstituencyNotFoundError: 名簿に存在しない場合
        """
        ...

    def search(self, text: str, limit: int | None = None) -> list[ConstituencyInfo]:
        """名称または地域コードの部分一致で検索する."""
        ...
