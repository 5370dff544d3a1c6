"""開票速報ウォッチコマンド."""

from __future__ import annotations

import asyncio
import logging

import click

from src.interfaces.cli.base import setup_logging, with_error_handling


logger = logging.getLogger(__name__)


@click.command()
@click.argument("constituency_ids", nargs=-1, required=True)
@click.option(
    "--interval", type=float, default=None, help="更新間隔（秒、省略時は設定値）"
)
@click.option(
    "--method",
    type=click.Choice(["largest_remainder", "highest_averages"]),
    default=None,
    help="議席配分方式（省略時は設定値）",
)
@click.option("--search", default="", help="議員候補者の名前検索")
@click.option("--party", default=None, help="議員候補者の政党フィルタ")
@click.option("--limit", type=int, default=10, help="候補者の表示上限")
@click.option("--once", is_flag=True, help="1回だけ取得して終了")
@with_error_handling
def watch(
    constituency_ids: tuple[str, ...],
    interval: float | None,
    method: str | None,
    search: str,
    party: str | None,
    limit: int,
    once: bool,
):
    """選挙区の開票速報を定期取得して表示する."""
    asyncio.run(
        _run_watch(constituency_ids, interval, method, search, party, limit, once)
    )


async def _run_watch(
    constituency_ids: tuple[str, ...],
    interval: float | None,
    method: str | None,
    search: str,
    party: str | None,
    limit: int,
    once: bool,
) -> None:
    from src.application.dtos.refresh_dto import RefreshCycleReport
    from src.domain.exceptions import ConstituencyNotFoundError
    from src.domain.value_objects.apportionment_result import ApportionmentMethod
    from src.infrastructure.config import get_settings, init_sentry
    from src.infrastructure.di.container import init_container
    from src.interfaces.cli.commands.tally.render import (
        echo_board,
        echo_cycle_summary,
    )

    settings = get_settings()
    updates: dict[str, object] = {}
    if interval is not None:
        updates["poll_interval"] = interval
    if method is not None:
        updates["apportionment_method"] = ApportionmentMethod(method)
    if updates:
        settings = settings.model_copy(update=updates)

    setup_logging(settings.log_level)
    init_sentry(settings)
    container = init_container(settings)

    repository = container.repositories.constituency_state_repository()
    board_usecase = container.use_cases.tally_board_usecase()

    async def show(report: RefreshCycleReport) -> None:
        echo_cycle_summary(report)
        echo_board(await board_usecase.execute(), limit=limit)

    coordinator = container.use_cases.polling_coordinator(on_cycle=show)

    tracked = 0
    for constituency_id in constituency_ids:
        try:
            await coordinator.track(constituency_id)
        except ConstituencyNotFoundError as e:
            click.echo(f"スキップ: {e}", err=True)
            continue
        await repository.set_search(constituency_id, search)
        await repository.set_party_filter(constituency_id, party)
        tracked += 1

    if tracked == 0:
        raise click.ClickException("追跡できる選挙区がありません")

    if once:
        echo_board(await board_usecase.execute(), limit=limit)
        return

    click.echo(f"{settings.poll_interval:.0f}秒ごとに更新します（Ctrl+C で終了）")
    try:
        await coordinator.run()
    except asyncio.CancelledError:
        coordinator.stop()
        raise
