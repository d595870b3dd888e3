import click

from unitctl.cli.context import CliContext, pass_cli_context, run_invocation
from unitctl.models.types import SystemctlVerb

LIFECYCLE_VERBS = {
    SystemctlVerb.START: 'Start a service.',
    SystemctlVerb.STOP: 'Stop a service.',
    SystemctlVerb.RESTART: 'Restart a service.',
    SystemctlVerb.RELOAD: 'Reload the configuration of a service.',
    SystemctlVerb.ENABLE: 'Enable a service to start at boot.',
    SystemctlVerb.DISABLE: 'Disable a service from starting at boot.',
}


def _lifecycle_command(verb: SystemctlVerb, help_text: str) -> click.Command:
    @click.command(verb.value, help=help_text)
    @click.argument('service')
    @pass_cli_context
    def command(obj: CliContext, service: str) -> None:
        build = getattr(obj.adapter, verb.value)
        run_invocation(obj, build(service))

    return command


lifecycle_commands = [
    _lifecycle_command(verb, help_text)
    for verb, help_text in LIFECYCLE_VERBS.items()
]


@click.command('status')
@click.argument('service')
@pass_cli_context
@click.pass_context
def status(ctx: click.Context, obj: CliContext, service: str) -> None:
    """Show the runtime status of a service.
    """
    # systemctl status exits non-zero for inactive units
    returncode = run_invocation(obj, obj.adapter.status(service), check=False)
    ctx.exit(returncode)


@click.command('daemon-reload')
@pass_cli_context
def daemon_reload(obj: CliContext) -> None:
    """Reload unit files from disk.
    """
    run_invocation(obj, obj.adapter.daemon_reload())
