"""ITallyFeedService のインフラストラクチャ実装.

TseResultsClient をラップし、選挙区・選挙種別からURLを組み立てて取得する。
"""

from __future__ import annotations

from typing import Any

from src.domain.value_objects.tally import ConstituencyInfo, ContestKind
from src.infrastructure.external.tse_api.client import TseResultsClient
from src.infrastructure.external.tse_api.urls import TseUrlBuilder


class TseTallyFeedService:
    """ITallyFeedService の具象実装."""

    def __init__(
        self,
        client: TseResultsClient | None = None,
        url_builder: TseUrlBuilder | None = None,
    ) -> None:
        self._client = client or TseResultsClient()
        self._urls = url_builder or TseUrlBuilder()

    async def fetch_contest(
        self, info: ConstituencyInfo, contest_kind: ContestKind
    ) -> dict[str, Any]:
        """選挙区・選挙種別の速報ドキュメントを取得する."""
        return await self._client.fetch_document(
            self._urls.contest_url(info, contest_kind)
        )

    def portrait_url(self, info: ConstituencyInfo, candidate_id: str) -> str:
        return self._urls.portrait_url(info, candidate_id)
