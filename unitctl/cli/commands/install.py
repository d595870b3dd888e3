import logging
from pathlib import Path

import click
from pydantic import ValidationError

from unitctl.cli.context import (
    CliContext,
    abort,
    pass_cli_context,
    run_invocation,
)
from unitctl.exceptions import UnitctlError
from unitctl.models.service_config import ServiceConfig, validate_service_name
from unitctl.models.types import RestartPolicy, ServiceType
from unitctl.system.unit_file import render_unit

logger = logging.getLogger(__name__)


def _validate_name(
    ctx: click.Context,
    param: click.Parameter,
    value: str,
) -> str:
    try:
        return validate_service_name(value)
    except ValueError as e:
        raise click.BadParameter(str(e))


def _parse_environment(
    ctx: click.Context,
    param: click.Parameter,
    value: tuple[str, ...],
) -> list[tuple[str, str]]:
    environment = []
    for item in value:
        key, separator, env_value = item.partition('=')
        if not separator or not key:
            raise click.BadParameter(f'Expected KEY=VALUE, got {item!r}')
        environment.append((key, env_value))
    return environment


@click.command('install')
@click.argument('service', callback=_validate_name)
@click.option(
    '--exec',
    'exec_start',
    required=True,
    help='Command line to run (ExecStart).',
)
@click.option('--description', help='Unit description.')
@click.option(
    '--working-directory',
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Working directory of the service.',
)
@click.option(
    '--env',
    'environment',
    multiple=True,
    metavar='KEY=VALUE',
    callback=_parse_environment,
    help='Environment variable, may be repeated.',
)
@click.option('--run-as', 'user', help='User to run the service as.')
@click.option('--group', help='Group to run the service as.')
@click.option(
    '--type',
    'service_type',
    type=click.Choice([t.value for t in ServiceType]),
    default=ServiceType.SIMPLE.value,
    show_default=True,
    help='Service type.',
)
@click.option(
    '--restart',
    type=click.Choice([p.value for p in RestartPolicy]),
    default=RestartPolicy.ON_FAILURE.value,
    show_default=True,
    help='Restart policy.',
)
@click.option(
    '--wanted-by',
    multiple=True,
    help='Target that wants the service, may be repeated. '
    'Defaults to the boot target of the current mode.',
)
@click.option('--enable', is_flag=True, help='Enable the service.')
@click.option('--start', is_flag=True, help='Start the service.')
@pass_cli_context
def install(
    obj: CliContext,
    service: str,
    exec_start: str,
    description: str | None,
    working_directory: Path | None,
    environment: list[tuple[str, str]],
    user: str | None,
    group: str | None,
    service_type: str,
    restart: str,
    wanted_by: tuple[str, ...],
    enable: bool,
    start: bool,
) -> None:
    """Generate and install a service unit file.
    """
    try:
        config = ServiceConfig(
            name=service,
            exec_start=exec_start,
            description=description,
            user=user,
            group=group,
            working_directory=working_directory,
            environment=environment,
            type=ServiceType(service_type),
            restart=RestartPolicy(restart),
            wanted_by=list(wanted_by),
        )
        unit = config.to_unit(obj.adapter.default_target)
    except ValidationError as e:
        abort(e)

    try:
        obj.adapter.init()
        unit_path = obj.adapter.install_service(service, unit)
    except UnitctlError as e:
        abort(e)

    click.echo(f'Installed {unit_path}')

    run_invocation(obj, obj.adapter.daemon_reload())
    if enable:
        run_invocation(obj, obj.adapter.enable(service))
    if start:
        run_invocation(obj, obj.adapter.start(service))


@click.command('uninstall')
@click.argument('service', callback=_validate_name)
@click.option(
    '--keep-running',
    is_flag=True,
    help='Do not stop the service before removing it.',
)
@pass_cli_context
def uninstall(obj: CliContext, service: str, keep_running: bool) -> None:
    """Stop, disable and remove a service unit file.
    """
    if not keep_running:
        if run_invocation(obj, obj.adapter.stop(service), check=False):
            logger.warning('Failed to stop %s, continuing', service)

    if run_invocation(obj, obj.adapter.disable(service), check=False):
        logger.warning('Failed to disable %s, continuing', service)

    try:
        obj.adapter.uninstall_service(service)
    except UnitctlError as e:
        abort(e)

    click.echo(f'Removed {obj.adapter.unit_file_path(service)}')

    run_invocation(obj, obj.adapter.daemon_reload())


@click.command('show')
@click.argument('service', callback=_validate_name)
@pass_cli_context
def show(obj: CliContext, service: str) -> None:
    """Print an installed service unit file.
    """
    try:
        unit = obj.adapter.read_service(service)
    except UnitctlError as e:
        abort(e)

    click.echo(render_unit(unit), nl=False)
