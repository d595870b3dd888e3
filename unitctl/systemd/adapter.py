import logging
import os
from collections.abc import Mapping
from pathlib import Path

from unitctl.dbus.adapters import DBusServiceQuery
from unitctl.dbus.interfaces import ServiceQuery
from unitctl.exceptions import (
    HomeDirectoryNotSetError,
    ServiceQueryError,
    ServicesDirectoryError,
    UnitFileNotFoundError,
    UnitFileReadError,
    UnitFileRemoveError,
    UnitFileWriteError,
)
from unitctl.models.service import CommandInvocation, ServiceRecord
from unitctl.models.types import OperatingMode, SystemctlVerb
from unitctl.models.unit import UnitModel
from unitctl.system.constants import (
    SERVICE_SUFFIX,
    SYSTEMCTL,
    USER_SCOPE_FLAG,
    BootTargets,
    SystemdPaths,
)
from unitctl.system.unit_file import parse_unit, render_unit


def resolve_services_directory(
    mode: OperatingMode,
    environ: Mapping[str, str],
) -> Path:
    """Resolve the directory unit files are installed to.

    Raises:
        HomeDirectoryNotSetError: In user mode when HOME is unset or empty
    """
    if mode == OperatingMode.SYSTEM:
        return Path(SystemdPaths.SYSTEM_UNIT_DIR)

    home = environ.get('HOME')
    if not home:
        raise HomeDirectoryNotSetError()

    return Path(home) / SystemdPaths.USER_CONFIG_DIR


class ServiceManagerAdapter:
    """Translates service management intents into systemd operations.

    Lifecycle methods only build systemctl invocations; running them is the
    caller's job. Install, uninstall and listing act directly.
    """

    def __init__(
        self,
        user_mode: bool = False,
        environ: Mapping[str, str] | None = None,
        query: ServiceQuery | None = None,
    ) -> None:
        """Initialize the adapter for system or user scope.

        Args:
            user_mode: Manage the calling user's services instead of
                system-wide ones
            environ: Environment used to resolve HOME, os.environ if omitted
            query: Live state query, D-Bus backed if omitted

        Raises:
            HomeDirectoryNotSetError: In user mode without HOME
        """
        self._logger = logging.getLogger(__name__)

        self._mode = OperatingMode.USER if user_mode \
            else OperatingMode.SYSTEM
        self._services_dir = resolve_services_directory(
            self._mode,
            os.environ if environ is None else environ,
        )
        self._default_args: tuple[str, ...] = (USER_SCOPE_FLAG,) \
            if user_mode else ()
        self._default_target = BootTargets.USER if user_mode \
            else BootTargets.SYSTEM
        self._query = query

        self._logger.debug(
            'Using %s mode with services directory %s',
            self._mode,
            self._services_dir,
        )

    @property
    def mode(self) -> OperatingMode:
        return self._mode

    @property
    def services_dir(self) -> Path:
        return self._services_dir

    @property
    def default_target(self) -> str:
        return str(self._default_target)

    def init(self) -> None:
        """Create the services directory and any missing parents.

        Raises:
            ServicesDirectoryError: If the directory cannot be created
        """
        try:
            self._services_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self._logger.error(
                'Failed to create services directory %s: %s',
                self._services_dir,
                e,
            )
            raise ServicesDirectoryError(self._services_dir, str(e)) from e

        self._logger.debug(
            'Ensured services directory exists: %s',
            self._services_dir,
        )

    def _systemctl(self, *args: str) -> CommandInvocation:
        return CommandInvocation(
            program=SYSTEMCTL,
            args=(*self._default_args, *(str(arg) for arg in args)),
        )

    def start(self, service: str) -> CommandInvocation:
        return self._systemctl(SystemctlVerb.START, service)

    def stop(self, service: str) -> CommandInvocation:
        return self._systemctl(SystemctlVerb.STOP, service)

    def restart(self, service: str) -> CommandInvocation:
        return self._systemctl(SystemctlVerb.RESTART, service)

    def reload(self, service: str) -> CommandInvocation:
        return self._systemctl(SystemctlVerb.RELOAD, service)

    def enable(self, service: str) -> CommandInvocation:
        return self._systemctl(SystemctlVerb.ENABLE, service)

    def disable(self, service: str) -> CommandInvocation:
        return self._systemctl(SystemctlVerb.DISABLE, service)

    def status(self, service: str) -> CommandInvocation:
        return self._systemctl(SystemctlVerb.STATUS, service)

    def daemon_reload(self) -> CommandInvocation:
        return self._systemctl(SystemctlVerb.DAEMON_RELOAD)

    def unit_file_path(self, service: str) -> Path:
        """Get the path of the unit file for a service.
        """
        return self._services_dir / f'{service}{SERVICE_SUFFIX}'

    def install_service(self, service: str, unit: UnitModel) -> Path:
        """Write the unit file for a service, replacing any existing one.

        Args:
            service: Service name without the .service suffix
            unit: Unit definition to write

        Returns:
            Path to the written unit file

        Raises:
            UnitFileWriteError: If the file cannot be written
        """
        unit_path = self.unit_file_path(service)

        try:
            unit_path.write_text(render_unit(unit), encoding='utf-8')
        except OSError as e:
            self._logger.error(
                'Failed to write unit file %s: %s',
                unit_path,
                e,
            )
            raise UnitFileWriteError(unit_path, str(e)) from e

        self._logger.info('Wrote unit file: %s', unit_path)
        return unit_path

    def uninstall_service(self, service: str) -> None:
        """Remove the unit file for a service.

        Raises:
            UnitFileNotFoundError: If the unit file does not exist
            UnitFileRemoveError: If the file cannot be removed
        """
        unit_path = self.unit_file_path(service)

        try:
            unit_path.unlink()
        except FileNotFoundError as e:
            self._logger.error('Unit file does not exist: %s', unit_path)
            raise UnitFileNotFoundError(unit_path) from e
        except OSError as e:
            self._logger.error(
                'Failed to remove unit file %s: %s',
                unit_path,
                e,
            )
            raise UnitFileRemoveError(unit_path, str(e)) from e

        self._logger.info('Removed unit file: %s', unit_path)

    def read_service(self, service: str) -> UnitModel:
        """Read an installed unit file back into a unit definition.

        Raises:
            UnitFileNotFoundError: If the unit file does not exist
            UnitFileReadError: If the file cannot be read or is not UTF-8
            UnitFileParseError: If the file is not a valid service unit
        """
        unit_path = self.unit_file_path(service)

        try:
            content = unit_path.read_text(encoding='utf-8')
        except FileNotFoundError as e:
            raise UnitFileNotFoundError(unit_path) from e
        except (OSError, UnicodeDecodeError) as e:
            self._logger.error(
                'Failed to read unit file %s: %s',
                unit_path,
                e,
            )
            raise UnitFileReadError(unit_path, str(e)) from e

        return parse_unit(content)

    async def get_services(self) -> list[ServiceRecord]:
        """Query systemd for every service in this adapter's scope.

        Returns a complete snapshot in the order systemd reports units.

        Raises:
            ServiceQueryError: If the query fails
        """
        if self._query is None:
            self._query = DBusServiceQuery.for_mode(self._mode)

        try:
            return list(await self._query.list_services())
        except ServiceQueryError:
            raise
        except Exception as e:
            self._logger.error(
                'Unexpected error while listing services: %s',
                e,
                exc_info=True,
            )
            raise ServiceQueryError(f'Failed to list services: {e}') from e
