"""開票速報 CLI コマンドグループ."""

import click

from src.interfaces.cli.commands.tally.apportion import apportion
from src.interfaces.cli.commands.tally.cities import cities
from src.interfaces.cli.commands.tally.watch import watch


@click.group()
def tally():
    """開票速報関連コマンド."""
    pass


tally.add_command(watch)
tally.add_command(apportion)
tally.add_command(cities)
