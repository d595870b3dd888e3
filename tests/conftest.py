from pathlib import Path

import pytest

from unitctl.cli.context import CliContext
from unitctl.dbus.interfaces import ServiceQuery
from unitctl.exceptions import CommandExecutionError
from unitctl.models.service import CommandInvocation, ServiceRecord
from unitctl.system.runner import CommandRunner
from unitctl.systemd.adapter import ServiceManagerAdapter


class FakeServiceQuery(ServiceQuery):
    """In-memory service query returning a fixed snapshot.
    """

    def __init__(
        self,
        records: list[ServiceRecord] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.records = records or []
        self.error = error
        self.calls = 0

    async def list_services(self) -> list[ServiceRecord]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return [record.model_copy() for record in self.records]


class RecordingRunner(CommandRunner):
    """Runner that records invocations instead of executing them.
    """

    def __init__(self, returncodes: dict[str, int] | None = None) -> None:
        super().__init__()
        self.calls: list[list[str]] = []
        self.returncodes = returncodes or {}

    def run(self, invocation: CommandInvocation, check: bool = True) -> int:
        self.calls.append(invocation.argv)

        verb = next(a for a in invocation.args if not a.startswith('--'))
        returncode = self.returncodes.get(verb, 0)
        if check and returncode != 0:
            raise CommandExecutionError(str(invocation), returncode)
        return returncode


@pytest.fixture
def services() -> list[ServiceRecord]:
    return [
        ServiceRecord(
            name='sshd',
            is_active=True,
            is_enabled=True,
            memory=5 * 1024 * 1024,
        ),
        ServiceRecord(
            name='cron',
            is_active=False,
            is_enabled=True,
            memory=None,
        ),
        ServiceRecord(
            name='web',
            is_active=True,
            is_enabled=False,
            memory=512,
        ),
    ]


@pytest.fixture
def fake_query(services: list[ServiceRecord]) -> FakeServiceQuery:
    return FakeServiceQuery(services)


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    home = tmp_path / 'home'
    home.mkdir()
    return home


@pytest.fixture
def user_adapter(
    home_dir: Path,
    fake_query: FakeServiceQuery,
) -> ServiceManagerAdapter:
    return ServiceManagerAdapter(
        user_mode=True,
        environ={'HOME': str(home_dir)},
        query=fake_query,
    )


@pytest.fixture
def system_adapter(fake_query: FakeServiceQuery) -> ServiceManagerAdapter:
    return ServiceManagerAdapter(user_mode=False, environ={}, query=fake_query)


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def cli_context(
    user_adapter: ServiceManagerAdapter,
    runner: RecordingRunner,
) -> CliContext:
    return CliContext(adapter=user_adapter, runner=runner)
