"""議席配分計算コマンド."""

from __future__ import annotations

import click

from src.application.dtos.tally_board_dto import ApportionmentOutputDto
from src.domain.services.apportionment_service import ApportionmentService
from src.domain.value_objects.apportionment_result import ApportionmentMethod
from src.interfaces.cli.base import with_error_handling
from src.interfaces.cli.commands.tally.render import echo_apportionment


def _parse_party_votes(values: tuple[str, ...]) -> dict[str, int]:
    """PARTY=VOTES 形式の引数を入力順の辞書に変換する."""
    party_votes: dict[str, int] = {}
    for value in values:
        party, sep, votes = value.partition("=")
        if not sep or not party:
            raise click.BadParameter(f"PARTY=VOTES 形式で指定してください: {value}")
        try:
            count = int(votes)
        except ValueError as e:
            raise click.BadParameter(f"得票数が整数ではありません: {value}") from e
        if count < 0:
            raise click.BadParameter(f"得票数は0以上で指定してください: {value}")
        party_votes[party] = count
    return party_votes


@click.command()
@click.option("--seats", type=click.IntRange(min=0), required=True, help="議席数")
@click.option(
    "--method",
    type=click.Choice([m.value for m in ApportionmentMethod]),
    default=ApportionmentMethod.LARGEST_REMAINDER.value,
    show_default=True,
    help="配分方式",
)
@click.argument("party_votes", nargs=-1, required=True)
@with_error_handling
def apportion(seats: int, method: str, party_votes: tuple[str, ...]):
    """得票数から議席配分を計算する（例: PL=600 PT=400）."""
    votes = _parse_party_votes(party_votes)
    apportionment_method = ApportionmentMethod(method)
    results = ApportionmentService.apportion(votes, seats, apportionment_method)

    click.echo(f"=== 議席配分 ({apportionment_method.value}, 定数 {seats}) ===")
    echo_apportionment(
        ApportionmentOutputDto(
            constituency_id="",
            method=apportionment_method,
            computable=True,
            seats_available=seats,
            results=results,
        )
    )
