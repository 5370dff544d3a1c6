"""TseTallyFeedService のユニットテスト."""

from unittest.mock import AsyncMock

import pytest

from src.domain.exceptions import FetchError
from src.domain.value_objects.tally import ConstituencyInfo, ContestKind
from src.infrastructure.external.tse_api.client import TseResultsClient
from src.infrastructure.external.tse_api.service import TseTallyFeedService
from src.infrastructure.external.tse_api.urls import TseUrlBuilder


RIO = ConstituencyInfo("60011", "RIO DE JANEIRO", "RJ")


@pytest.fixture
def mock_client() -> AsyncMock:
    client = AsyncMock(spec=TseResultsClient)
    client.fetch_document = AsyncMock(return_value={"s": {"pst": "10,00"}})
    return client


@pytest.fixture
def service(mock_client: AsyncMock) -> TseTallyFeedService:
    return TseTallyFeedService(client=mock_client, url_builder=TseUrlBuilder())


class TestFetchContest:
    @pytest.mark.asyncio
    async def test_fetches_council_url(
        self, service: TseTallyFeedService, mock_client: AsyncMock
    ) -> None:
        result = await service.fetch_contest(RIO, ContestKind.COUNCIL)

        assert result == {"s": {"pst": "10,00"}}
        mock_client.fetch_document.assert_awaited_once_with(
            "https://resultados.tse.jus.br/oficial/ele2024/619/dados/rj/"
            "rj60011-c0013-e000619-u.json"
        )

    @pytest.mark.asyncio
    async def test_propagates_fetch_error(
        self, service: TseTallyFeedService, mock_client: AsyncMock
    ) -> None:
        mock_client.fetch_document.side_effect = FetchError("速報取得エラー: 500", 500)

        with pytest.raises(FetchError):
            await service.fetch_contest(RIO, ContestKind.EXECUTIVE)


def test_portrait_url(service: TseTallyFeedService) -> None:
    assert service.portrait_url(RIO, "190001").endswith("/fotos/rj/190001.jpeg")
