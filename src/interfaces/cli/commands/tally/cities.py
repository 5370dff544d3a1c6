"""選挙区名簿検索コマンド."""

import click

from src.interfaces.cli.base import with_error_handling


@click.command()
@click.argument("text", default="")
@click.option("--limit", type=int, default=20, help="表示上限")
@with_error_handling
def cities(text: str, limit: int):
    """名称または州コードで選挙区を検索する."""
    from src.infrastructure.di.container import get_container, init_container

    try:
        container = get_container()
    except RuntimeError:
        container = init_container()

    directory = container.services.constituency_directory()
    matches = directory.search(text, limit=limit)

    if not matches:
        click.echo("該当する選挙区がありません。")
        return
    for info in matches:
        click.echo(f"  {info.constituency_id:>6}  {info.name} - {info.region}")
