"""開票速報データ取得サービスのインターフェース."""

from __future__ import annotations

from typing import Any, Protocol

from src.domain.value_objects.tally import ConstituencyInfo, ContestKind


class ITallyFeedService(Protocol):
    """速報フィードから1選挙分のドキュメントを取得するサービスのインターフェース."""

    async def fetch_contest(
        self, info: ConstituencyInfo, contest_kind: ContestKind
    ) -> dict[str, Any]:
        """パース済みの速報ドキュメントを取得する.

        Raises:
            FetchError: ネットワークエラー・非成功ステータス
        """
        ...

    def portrait_url(self, info: ConstituencyInfo, candidate_id: str) -> str:
        """候補者の顔写真URLを返す."""
        ...
