import click

from unitctl.cli.context import CliContext, pass_cli_context
from unitctl.tui.app import UnitctlApp


@click.command('tui')
@pass_cli_context
def tui(obj: CliContext) -> None:
    """Browse services in an interactive table.
    """
    UnitctlApp(obj.adapter).run()
