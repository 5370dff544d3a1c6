"""DIコンテナのテスト."""

import pytest

from src.application.services.polling_coordinator import PollingCoordinator
from src.application.usecases.tally_board_usecase import TallyBoardUseCase
from src.domain.value_objects.apportionment_result import ApportionmentMethod
from src.infrastructure.config.settings import Settings
from src.infrastructure.di.container import (
    get_container,
    init_container,
    reset_container,
)


@pytest.fixture(autouse=True)
def _reset():
    reset_container()
    yield
    reset_container()


def test_get_container_before_init_raises() -> None:
    with pytest.raises(RuntimeError):
        get_container()


def test_wiring_shares_repository() -> None:
    """ユースケースとコーディネーターは同じリポジトリを共有する."""
    container = init_container(
        Settings(apportionment_method=ApportionmentMethod.HIGHEST_AVERAGES)
    )

    coordinator = container.use_cases.polling_coordinator()
    board = container.use_cases.tally_board_usecase()

    assert isinstance(coordinator, PollingCoordinator)
    assert isinstance(board, TallyBoardUseCase)
    assert board._repo is coordinator._repo
    assert board._default_method is ApportionmentMethod.HIGHEST_AVERAGES
    assert get_container() is container


def test_directory_loaded_from_settings() -> None:
    container = init_container(Settings())

    directory = container.services.constituency_directory()

    assert directory.resolve("60011").region == "RJ"
