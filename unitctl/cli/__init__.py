import click

from unitctl.cli.commands.install import install, show, uninstall
from unitctl.cli.commands.lifecycle import (
    daemon_reload,
    lifecycle_commands,
    status,
)
from unitctl.cli.commands.list_services import list_services
from unitctl.cli.commands.tui import tui
from unitctl.cli.context import CliContext, abort
from unitctl.exceptions import UnitctlError
from unitctl.system.runner import CommandRunner
from unitctl.systemd.adapter import ServiceManagerAdapter


@click.group()
@click.option(
    '--user/--system',
    'user_mode',
    default=False,
    envvar='UNITCTL_USER_MODE',
    help='Manage the calling user\'s services instead of system ones.',
)
@click.pass_context
def cli(ctx: click.Context, user_mode: bool) -> None:
    """unitctl - Manage systemd services.
    """
    if ctx.obj is not None:
        return

    try:
        adapter = ServiceManagerAdapter(user_mode=user_mode)
    except UnitctlError as e:
        abort(e)

    ctx.obj = CliContext(adapter=adapter, runner=CommandRunner())


for command in [
    list_services,
    *lifecycle_commands,
    status,
    daemon_reload,
    install,
    uninstall,
    show,
    tui,
]:
    cli.add_command(command)


def run_cli() -> None:
    """Run the CLI interface.
    """
    cli()


__all__ = [
    'cli',
    'run_cli',
]
