import asyncio

import click

from unitctl.cli.context import CliContext, abort, pass_cli_context
from unitctl.exceptions import UnitctlError
from unitctl.models.service import ServiceRecord
from unitctl.utils.formatting import format_flag, format_memory


def format_services_table(services: list[ServiceRecord]) -> str:
    """Format services into a simple table sorted by name.
    """
    if not services:
        return 'No services found.'

    rows = [
        (
            service.name,
            format_flag(service.is_active),
            format_flag(service.is_enabled),
            format_memory(service.memory),
        )
        for service in sorted(services, key=lambda s: s.name)
    ]
    headers = ('SERVICE', 'ACTIVE', 'ENABLED', 'MEMORY')

    # Calculate column widths
    widths = [
        max(len(headers[i]), max(len(row[i]) for row in rows))
        for i in range(len(headers))
    ]

    def format_row(row: tuple[str, ...]) -> str:
        return ' '.join(
            f'{cell:<{width}}' for cell, width in zip(row, widths)
        ).rstrip()

    header = format_row(headers)
    lines = [header, '-' * len(header)]
    lines.extend(format_row(row) for row in rows)

    return '\n'.join(lines)


def format_services_raw(services: list[ServiceRecord]) -> str:
    """Format services one per line, in reported order.
    """
    return '\n'.join(
        f'{s.name} {str(s.is_active).lower()} '
        f'{str(s.is_enabled).lower()} '
        f'{s.memory if s.memory is not None else "-"}'
        for s in services
    )


@click.command('list')
@click.option(
    '--raw',
    is_flag=True,
    help='Show list in raw format.',
)
@pass_cli_context
def list_services(obj: CliContext, raw: bool) -> None:
    """List services with their state and memory usage.
    """
    try:
        services = asyncio.run(obj.adapter.get_services())
    except UnitctlError as e:
        abort(e)

    if raw:
        if services:
            click.echo(format_services_raw(services))
    else:
        click.echo(format_services_table(services))
