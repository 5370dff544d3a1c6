"""開票速報ウォッチスクリプト.

TSEの開票速報JSONを定期取得し、選挙区ごとの集計と議席配分をログ出力する。

Usage:
    # サンパウロ・リオデジャネイロを60秒ごとに取得
    uv run python scripts/watch_tally.py 71072 60011

    # 1回だけ取得してドント式で配分
    uv run python scripts/watch_tally.py 71072 --once --method highest_averages

データソース:
    TSE 開票速報 (resultados.tse.jus.br)
"""

import argparse
import asyncio
import logging
import sys

from pathlib import Path


sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.application.dtos.refresh_dto import RefreshCycleReport
from src.application.services.polling_coordinator import PollingCoordinator
from src.application.usecases.tally_board_usecase import TallyBoardUseCase
from src.domain.exceptions import ConstituencyNotFoundError
from src.domain.value_objects.apportionment_result import ApportionmentMethod
from src.infrastructure.config import get_settings
from src.infrastructure.external.tse_api import (
    TseResultsClient,
    TseTallyFeedService,
    TseUrlBuilder,
)
from src.infrastructure.importers.constituency_directory import (
    JsonConstituencyDirectory,
)
from src.infrastructure.persistence.in_memory_constituency_state_repository import (
    InMemoryConstituencyStateRepository,
)


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


async def log_board(board_usecase: TallyBoardUseCase, method: ApportionmentMethod) -> None:
    """全選挙区の集計結果をログ出力する."""
    for board in await board_usecase.execute(method):
        logger.info(
            "--- %s - %s (開票率 %s%%, %s) ---",
            board.display_name,
            board.region,
            f"{board.percent_totalized:.2f}"
            if board.percent_totalized is not None
            else "?",
            board.snapshot_timestamp,
        )
        if board.executive_candidates:
            leader = max(board.executive_candidates, key=lambda c: c.votes)
            logger.info("首長選挙 首位: %s (%s) %d票", leader.name, leader.party_code, leader.votes)
        if not board.apportionment.computable:
            logger.info("議席配分: %s", board.apportionment.message)
            continue
        for r in board.apportionment.results:
            if r.seats:
                logger.info("  %s: %d議席 (%d票)", r.party_code, r.seats, r.votes)


async def main(constituency_ids: list[str], method: ApportionmentMethod, once: bool) -> None:
    """メイン処理."""
    settings = get_settings()
    repository = InMemoryConstituencyStateRepository()
    board_usecase = TallyBoardUseCase(repository, default_method=method)
    feed_service = TseTallyFeedService(
        client=TseResultsClient(timeout=settings.request_timeout),
        url_builder=TseUrlBuilder(
            base_url=settings.base_url,
            environment=settings.environment,
            election_path=settings.election_path,
            election_code=settings.election_code,
        ),
    )

    async def on_cycle(report: RefreshCycleReport) -> None:
        await log_board(board_usecase, method)

    coordinator = PollingCoordinator(
        repository=repository,
        feed_service=feed_service,
        directory=JsonConstituencyDirectory(settings.directory_path),
        poll_interval=settings.poll_interval,
        max_concurrency=settings.max_concurrency,
        on_cycle=on_cycle,
    )

    for constituency_id in constituency_ids:
        try:
            await coordinator.track(constituency_id)
        except ConstituencyNotFoundError:
            logger.error("名簿に存在しない選挙区: %s", constituency_id)

    if not await repository.list_ids():
        sys.exit(1)

    if once:
        await log_board(board_usecase, method)
        return

    await coordinator.run()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="TSE開票速報を定期取得して議席配分を表示",
        epilog="例: uv run python scripts/watch_tally.py 71072 60011",
    )
    parser.add_argument("constituency_ids", nargs="+", help="選挙区ID（TSE市町村コード）")
    parser.add_argument(
        "--method",
        choices=[m.value for m in ApportionmentMethod],
        default=ApportionmentMethod.LARGEST_REMAINDER.value,
        help="議席配分方式",
    )
    parser.add_argument("--once", action="store_true", help="1回だけ取得して終了")
    args = parser.parse_args()

    try:
        asyncio.run(main(args.constituency_ids, ApportionmentMethod(args.method), args.once))
    except KeyboardInterrupt:
        logger.info("中断しました")
