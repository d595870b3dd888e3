from dataclasses import dataclass
from typing import NoReturn

import click

from unitctl.exceptions import UnitctlError
from unitctl.models.service import CommandInvocation
from unitctl.system.runner import CommandRunner
from unitctl.systemd.adapter import ServiceManagerAdapter


@dataclass
class CliContext:
    """Objects shared by all commands of one invocation.
    """

    adapter: ServiceManagerAdapter
    runner: CommandRunner


pass_cli_context = click.make_pass_decorator(CliContext)


def abort(error: Exception) -> NoReturn:
    """Print an error and exit with status 1.
    """
    click.echo(f'Error: {error}', err=True)
    raise SystemExit(1)


def run_invocation(
    obj: CliContext,
    invocation: CommandInvocation,
    check: bool = True,
) -> int:
    """Execute an invocation, aborting the command on failure.
    """
    try:
        return obj.runner.run(invocation, check=check)
    except UnitctlError as e:
        abort(e)
