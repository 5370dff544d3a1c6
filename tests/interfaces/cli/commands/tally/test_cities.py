"""tally cities コマンドのテスト."""

from unittest.mock import MagicMock, patch

from click.testing import CliRunner

from src.domain.value_objects.tally import ConstituencyInfo
from src.infrastructure.importers.constituency_directory import (
    InMemoryConstituencyDirectory,
)
from src.interfaces.cli.commands.tally.cities import cities


_DI_PATH = "src.infrastructure.di.container"


def _setup_directory(mock_container: MagicMock) -> None:
    mock_container.services.constituency_directory.return_value = (
        InMemoryConstituencyDirectory(
            [
                ConstituencyInfo("71072", "SÃO PAULO", "SP"),
                ConstituencyInfo("60011", "RIO DE JANEIRO", "RJ"),
            ]
        )
    )


class TestCitiesCommand:
    @patch(f"{_DI_PATH}.get_container")
    def test_search_ignores_accents(self, mock_get_container: MagicMock) -> None:
        mock_container = MagicMock()
        mock_get_container.return_value = mock_container
        _setup_directory(mock_container)

        runner = CliRunner()
        result = runner.invoke(cities, ["sao"])

        assert result.exit_code == 0
        assert "71072" in result.output
        assert "RIO DE JANEIRO" not in result.output

    @patch(f"{_DI_PATH}.get_container")
    def test_no_match(self, mock_get_container: MagicMock) -> None:
        mock_container = MagicMock()
        mock_get_container.return_value = mock_container
        _setup_directory(mock_container)

        runner = CliRunner()
        result = runner.invoke(cities, ["manaus"])

        assert result.exit_code == 0
        assert "該当する選挙区がありません" in result.output

    @patch(f"{_DI_PATH}.get_container")
    def test_limit(self, mock_get_container: MagicMock) -> None:
        mock_container = MagicMock()
        mock_get_container.return_value = mock_container
        _setup_directory(mock_container)

        runner = CliRunner()
        result = runner.invoke(cities, ["--limit", "1"])

        assert result.exit_code == 0
        assert "71072" in result.output
        assert "60011" not in result.output
