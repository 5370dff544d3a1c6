"""CLI エントリーポイント."""

import click

from src.interfaces.cli.commands.tally import tally


@click.group()
@click.version_option(package_name="tally-watcher")
def main():
    """開票速報ウォッチャー."""
    pass


main.add_command(tally)


if __name__ == "__main__":
    main()
