import asyncio
from pathlib import Path

import pytest

from unitctl.exceptions import (
    HomeDirectoryNotSetError,
    ServiceQueryError,
    ServicesDirectoryError,
    UnitFileNotFoundError,
    UnitFileReadError,
    UnitFileRemoveError,
    UnitFileWriteError,
)
from unitctl.models.types import OperatingMode
from unitctl.models.unit import UnitModel
from unitctl.systemd.adapter import ServiceManagerAdapter

from .conftest import FakeServiceQuery

SERVICE_VERBS = ['start', 'stop', 'restart', 'reload', 'enable', 'disable', 'status']


@pytest.fixture
def demo_unit() -> UnitModel:
    return UnitModel(
        unit=[('Description', 'demo svc')],
        service=[('ExecStart', '/bin/true')],
        install=[('WantedBy', 'multi-user.target')],
    )


class TestConstruction:
    def test_system_mode(self) -> None:
        adapter = ServiceManagerAdapter(user_mode=False, environ={})

        assert adapter.mode == OperatingMode.SYSTEM
        assert adapter.services_dir == Path('/etc/systemd/system')
        assert adapter.default_target == 'multi-user.target'

    def test_user_mode(self, home_dir: Path) -> None:
        adapter = ServiceManagerAdapter(
            user_mode=True,
            environ={'HOME': str(home_dir)},
        )

        assert adapter.mode == OperatingMode.USER
        assert adapter.services_dir == home_dir / '.config/systemd/user'
        assert adapter.default_target == 'default.target'

    @pytest.mark.parametrize('environ', [{}, {'HOME': ''}])
    def test_user_mode_requires_home(self, environ: dict[str, str]) -> None:
        with pytest.raises(HomeDirectoryNotSetError):
            ServiceManagerAdapter(user_mode=True, environ=environ)

    def test_construction_does_not_touch_disk(self, home_dir: Path) -> None:
        adapter = ServiceManagerAdapter(
            user_mode=True,
            environ={'HOME': str(home_dir)},
        )

        assert not adapter.services_dir.exists()


class TestCommandBuilders:
    @pytest.mark.parametrize('verb', SERVICE_VERBS)
    def test_system_mode_has_no_scope_flag(
        self,
        system_adapter: ServiceManagerAdapter,
        verb: str,
    ) -> None:
        invocation = getattr(system_adapter, verb)('demo')

        assert invocation.program == 'systemctl'
        assert invocation.args == (verb, 'demo')

    @pytest.mark.parametrize('verb', SERVICE_VERBS)
    def test_user_mode_prepends_scope_flag(
        self,
        user_adapter: ServiceManagerAdapter,
        verb: str,
    ) -> None:
        invocation = getattr(user_adapter, verb)('demo')

        assert invocation.argv == ['systemctl', '--user', verb, 'demo']

    def test_daemon_reload(
        self,
        system_adapter: ServiceManagerAdapter,
        user_adapter: ServiceManagerAdapter,
    ) -> None:
        assert system_adapter.daemon_reload().args == ('daemon-reload',)
        assert user_adapter.daemon_reload().args == ('--user', 'daemon-reload')

    def test_invocation_renders_as_command_line(
        self,
        user_adapter: ServiceManagerAdapter,
    ) -> None:
        invocation = user_adapter.start('my app')

        assert str(invocation) == "systemctl --user start 'my app'"


class TestInit:
    def test_creates_missing_directories(
        self,
        user_adapter: ServiceManagerAdapter,
    ) -> None:
        user_adapter.init()

        assert user_adapter.services_dir.is_dir()

    def test_is_idempotent(self, user_adapter: ServiceManagerAdapter) -> None:
        user_adapter.init()
        user_adapter.init()

        assert user_adapter.services_dir.is_dir()

    def test_failure_raises(self, tmp_path: Path) -> None:
        home = tmp_path / 'not-a-directory'
        home.write_text('')
        adapter = ServiceManagerAdapter(
            user_mode=True,
            environ={'HOME': str(home)},
        )

        with pytest.raises(ServicesDirectoryError):
            adapter.init()


class TestInstall:
    def test_writes_unit_file(
        self,
        user_adapter: ServiceManagerAdapter,
        demo_unit: UnitModel,
    ) -> None:
        user_adapter.init()

        path = user_adapter.install_service('demo', demo_unit)

        assert path == user_adapter.services_dir / 'demo.service'
        lines = [line for line in path.read_text().splitlines() if line]
        assert lines == [
            '[Unit]',
            'Description=demo svc',
            '[Service]',
            'ExecStart=/bin/true',
            '[Install]',
            'WantedBy=multi-user.target',
        ]

    def test_overwrites_existing_file(
        self,
        user_adapter: ServiceManagerAdapter,
        demo_unit: UnitModel,
    ) -> None:
        user_adapter.init()
        user_adapter.install_service('demo', demo_unit)

        replacement = UnitModel(service=[('ExecStart', '/bin/false')])
        user_adapter.install_service('demo', replacement)

        assert user_adapter.read_service('demo') == replacement

    def test_write_failure_raises(
        self,
        user_adapter: ServiceManagerAdapter,
        demo_unit: UnitModel,
    ) -> None:
        # services directory was never created
        with pytest.raises(UnitFileWriteError) as exc_info:
            user_adapter.install_service('demo', demo_unit)

        assert exc_info.value.path == user_adapter.unit_file_path('demo')


class TestUninstall:
    def test_removes_file_and_fails_when_absent(
        self,
        user_adapter: ServiceManagerAdapter,
        demo_unit: UnitModel,
    ) -> None:
        user_adapter.init()
        path = user_adapter.install_service('demo', demo_unit)

        user_adapter.uninstall_service('demo')

        assert not path.exists()
        with pytest.raises(UnitFileNotFoundError):
            user_adapter.uninstall_service('demo')

    def test_remove_failure_raises(
        self,
        user_adapter: ServiceManagerAdapter,
    ) -> None:
        user_adapter.init()
        user_adapter.unit_file_path('demo').mkdir()

        with pytest.raises(UnitFileRemoveError):
            user_adapter.uninstall_service('demo')

    def test_read_missing_service(
        self,
        user_adapter: ServiceManagerAdapter,
    ) -> None:
        user_adapter.init()

        with pytest.raises(UnitFileNotFoundError):
            user_adapter.read_service('missing')

    def test_read_non_utf8_file(
        self,
        user_adapter: ServiceManagerAdapter,
    ) -> None:
        user_adapter.init()
        user_adapter.unit_file_path('demo').write_bytes(
            b'[Unit]\nDescription=caf\xe9\n'
        )

        with pytest.raises(UnitFileReadError) as exc_info:
            user_adapter.read_service('demo')

        assert exc_info.value.path == user_adapter.unit_file_path('demo')

    def test_read_directory_in_place_of_file(
        self,
        user_adapter: ServiceManagerAdapter,
    ) -> None:
        user_adapter.init()
        user_adapter.unit_file_path('demo').mkdir()

        with pytest.raises(UnitFileReadError):
            user_adapter.read_service('demo')


class TestGetServices:
    def test_returns_reported_order(
        self,
        user_adapter: ServiceManagerAdapter,
    ) -> None:
        services = asyncio.run(user_adapter.get_services())

        assert [s.name for s in services] == ['sshd', 'cron', 'web']

    def test_repeated_calls_return_equal_snapshots(
        self,
        user_adapter: ServiceManagerAdapter,
        fake_query: FakeServiceQuery,
    ) -> None:
        first = asyncio.run(user_adapter.get_services())
        second = asyncio.run(user_adapter.get_services())

        assert first == second
        assert first is not second
        assert fake_query.calls == 2

    def test_query_errors_propagate(self, home_dir: Path) -> None:
        adapter = ServiceManagerAdapter(
            user_mode=True,
            environ={'HOME': str(home_dir)},
            query=FakeServiceQuery(error=ServiceQueryError('bus gone')),
        )

        with pytest.raises(ServiceQueryError, match='bus gone'):
            asyncio.run(adapter.get_services())

    def test_unexpected_errors_are_wrapped(self, home_dir: Path) -> None:
        adapter = ServiceManagerAdapter(
            user_mode=True,
            environ={'HOME': str(home_dir)},
            query=FakeServiceQuery(error=RuntimeError('boom')),
        )

        with pytest.raises(ServiceQueryError) as exc_info:
            asyncio.run(adapter.get_services())

        assert isinstance(exc_info.value.__cause__, RuntimeError)
