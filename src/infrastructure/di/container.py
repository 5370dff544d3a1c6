"""依存性注入コンテナ.

dependency-injector で各層の実装を組み立てる。
CLI からは init_container() / get_container() 経由で利用する。
"""

from __future__ import annotations

import logging

from dependency_injector import containers, providers

from src.application.services.polling_coordinator import PollingCoordinator
from src.application.usecases.query_apportionment_usecase import (
    QueryApportionmentUseCase,
)
from src.application.usecases.tally_board_usecase import TallyBoardUseCase
from src.domain.services.tally_normalizer import TallyNormalizer
from src.infrastructure.config.settings import Settings, get_settings
from src.infrastructure.external.tse_api.client import TseResultsClient
from src.infrastructure.external.tse_api.service import TseTallyFeedService
from src.infrastructure.external.tse_api.urls import TseUrlBuilder
from src.infrastructure.importers.constituency_directory import (
    JsonConstituencyDirectory,
)
from src.infrastructure.persistence.in_memory_constituency_state_repository import (
    InMemoryConstituencyStateRepository,
)


logger = logging.getLogger(__name__)


class RepositoryContainer(containers.DeclarativeContainer):
    """リポジトリ."""

    constituency_state_repository = providers.Singleton(
        InMemoryConstituencyStateRepository
    )


class ServiceContainer(containers.DeclarativeContainer):
    """外部サービス・ドメインサービス."""

    settings = providers.Dependency(instance_of=Settings)

    url_builder = providers.Singleton(
        TseUrlBuilder,
        base_url=settings.provided.base_url,
        environment=settings.provided.environment,
        election_path=settings.provided.election_path,
        election_code=settings.provided.election_code,
    )
    results_client = providers.Singleton(
        TseResultsClient,
        timeout=settings.provided.request_timeout,
    )
    tally_feed_service = providers.Singleton(
        TseTallyFeedService,
        client=results_client,
        url_builder=url_builder,
    )
    constituency_directory = providers.Singleton(
        JsonConstituencyDirectory,
        path=settings.provided.directory_path,
    )
    tally_normalizer = providers.Singleton(TallyNormalizer)


class UseCaseContainer(containers.DeclarativeContainer):
    """ユースケース・アプリケーションサービス."""

    settings = providers.Dependency(instance_of=Settings)
    repositories = providers.DependenciesContainer()
    services = providers.DependenciesContainer()

    polling_coordinator = providers.Factory(
        PollingCoordinator,
        repository=repositories.constituency_state_repository,
        feed_service=services.tally_feed_service,
        directory=services.constituency_directory,
        normalizer=services.tally_normalizer,
        poll_interval=settings.provided.poll_interval,
        max_concurrency=settings.provided.max_concurrency,
    )
    query_apportionment_usecase = providers.Factory(
        QueryApportionmentUseCase,
        repository=repositories.constituency_state_repository,
        default_method=settings.provided.apportionment_method,
    )
    tally_board_usecase = providers.Factory(
        TallyBoardUseCase,
        repository=repositories.constituency_state_repository,
        default_method=settings.provided.apportionment_method,
    )


class ApplicationContainer(containers.DeclarativeContainer):
    """アプリケーション全体のコンテナ."""

    settings = providers.Dependency(instance_of=Settings)

    repositories = providers.Container(RepositoryContainer)
    services = providers.Container(ServiceContainer, settings=settings)
    use_cases = providers.Container(
        UseCaseContainer,
        settings=settings,
        repositories=repositories,
        services=services,
    )


_container: ApplicationContainer | None = None


def init_container(settings: Settings | None = None) -> ApplicationContainer:
    """コンテナを初期化する."""
    global _container
    _container = ApplicationContainer(settings=settings or get_settings())
    logger.debug("DIコンテナを初期化しました")
    return _container


def get_container() -> ApplicationContainer:
    """初期化済みのコンテナを取得する.

    Raises:
        RuntimeError: 未初期化の場合
    """
    if _container is None:
        raise RuntimeError("DIコンテナが初期化されていません")
    return _container


def reset_container() -> None:
    """コンテナを破棄する（テスト用）."""
    global _container
    _container = None
