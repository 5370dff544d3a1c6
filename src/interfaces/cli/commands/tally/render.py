"""開票速報ボードのテキスト出力."""

from __future__ import annotations

import click

from src.application.dtos.refresh_dto import RefreshCycleReport, RefreshStatus
from src.application.dtos.tally_board_dto import (
    ApportionmentOutputDto,
    ConstituencyBoardDto,
)
from src.domain.value_objects.tally import CandidateRecord


def echo_candidates(candidates: list[CandidateRecord], limit: int) -> None:
    shown = sorted(candidates, key=lambda c: c.votes, reverse=True)[:limit]
    for c in shown:
        click.echo(
            f"    {c.name:<30} {c.party_code:<12} {c.votes:>10,}票 "
            f"({c.vote_percentage:.2f}%)"
        )
    if len(candidates) > limit:
        click.echo(f"    ... ほか {len(candidates) - limit} 名")


def echo_apportionment(dto: ApportionmentOutputDto) -> None:
    if not dto.computable:
        click.echo(f"    {dto.message}")
        return
    for r in dto.results:
        seats = f"{r.seats}議席" if r.seats else "議席なし"
        click.echo(f"    {r.party_code:<12} {seats:>8} ({r.votes:,}票)")


def echo_board(boards: list[ConstituencyBoardDto], limit: int = 10) -> None:
    """全選挙区のボードを出力する."""
    if not boards:
        click.echo("追跡中の選挙区はありません。")
        return

    for board in boards:
        click.echo(f"\n=== {board.display_name} - {board.region} ===")
        if board.percent_totalized is None:
            click.echo("  開票データ未取得")
        else:
            click.echo(
                f"  開票率: {board.percent_totalized:.2f}% "
                f"({board.snapshot_timestamp or '時刻不明'})"
            )
        if board.candidate_search or board.party_filter:
            click.echo(
                f"  絞り込み: 検索='{board.candidate_search}' "
                f"政党={board.party_filter or 'すべて'}"
            )

        click.echo("  [首長選挙]")
        echo_candidates(board.executive_candidates, limit)
        click.echo("  [議員選挙]")
        echo_candidates(board.council_candidates, limit)
        click.echo(
            f"  [議席配分: {board.apportionment.method.value}, "
            f"定数 {board.apportionment.seats_available}]"
        )
        echo_apportionment(board.apportionment)


def echo_cycle_summary(report: RefreshCycleReport) -> None:
    """更新サイクルの結果を出力する."""
    click.echo(
        f"\n更新: 成功 {report.count(RefreshStatus.SUCCESS)} / "
        f"一部失敗 {report.count(RefreshStatus.PARTIAL)} / "
        f"失敗 {report.count(RefreshStatus.FAILED)} / "
        f"スキップ {report.count(RefreshStatus.SKIPPED)}"
    )
    for result in report.results:
        for error in result.errors:
            click.echo(f"  ! {result.constituency_id} {error}", err=True)
