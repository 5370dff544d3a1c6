"""TSE開票速報JSONクライアント.

httpx asyncベースのHTTPクライアントで、速報JSONファイルを1件ずつ取得する。
"""

from __future__ import annotations

import logging

from typing import Any

import httpx

from src.domain.exceptions import FetchError


logger = logging.getLogger(__name__)


class TseResultsClient:
    """TSE開票速報クライアント (httpx async)."""

    DEFAULT_TIMEOUT = 30.0
    USER_AGENT = "TallyWatcher/1.0"

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._external_client = client
        self._owns_client = client is None
        self._timeout = timeout

    async def _get_client(self) -> httpx.AsyncClient:
        """HTTPクライアントを取得（外部注入 or 自動生成）."""
        if self._external_client is not None:
            return self._external_client
        return httpx.AsyncClient(
            timeout=self._timeout,
            headers={"User-Agent": self.USER_AGENT},
        )

    async def fetch_document(self, url: str) -> dict[str, Any]:
        """速報JSONを取得してパースする.

        Raises:
            FetchError: HTTPエラー・タイムアウト・JSONでないレスポンス
        """
        client = await self._get_client()

        try:
            logger.debug("速報取得: %s", url)
            response = await client.get(url)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise FetchError(
                f"速報取得エラー: {e.response.status_code}",
                status_code=e.response.status_code,
                url=url,
            ) from e
        except httpx.TimeoutException as e:
            raise FetchError("速報取得タイムアウト", url=url) from e
        except httpx.HTTPError as e:
            raise FetchError(f"HTTPエラー: {e}", url=url) from e
        except ValueError as e:
            raise FetchError("速報レスポンスがJSONではありません", url=url) from e
        finally:
            if self._owns_client:
                await client.aclose()

        if not isinstance(data, dict):
            raise FetchError("速報レスポンスがオブジェクトではありません", url=url)
        return data
