import logging
from typing import Any

from dbus_next.errors import DBusError

from unitctl.dbus.connection import DBusConnectionManager
from unitctl.dbus.constants import SystemdDBusConstants
from unitctl.dbus.unit import SystemdUnit


class SystemdManager:
    """Manages systemd interactions.

    Serves as a factory for SystemdUnit instances
    """

    def __init__(self, dbus_manager: DBusConnectionManager | None = None):
        """Initialize the SystemdManager.

        Args:
            dbus_manager: The D-Bus connection manager.
        """
        self._logger = logging.getLogger(__name__)

        self._dbus_manager = dbus_manager or \
            DBusConnectionManager.get_instance()
        self._manager_proxy = None

    async def _ensure_manager_proxy(self) -> None:
        """Ensure the systemd manager D-Bus proxy is initialized.
        """
        if self._manager_proxy is not None:
            return

        try:
            bus = await self._dbus_manager.get_bus()
            introspection = await bus.introspect(
                SystemdDBusConstants.SERVICE_NAME,
                SystemdDBusConstants.OBJECT_PATH,
            )
            proxy_object = bus.get_proxy_object(
                SystemdDBusConstants.SERVICE_NAME,
                SystemdDBusConstants.OBJECT_PATH,
                introspection,
            )
            self._manager_proxy = proxy_object.get_interface(
                SystemdDBusConstants.MANAGER_INTERFACE
            )
        except DBusError as e:
            self._logger.error(
                'Failed to create systemd manager proxy: %s',
                e,
            )
            raise

    async def list_units(self) -> list[list[Any]]:
        """List all loaded systemd units.

        Returns:
            List of unit data arrays as returned by systemd

        Raises:
            DBusError: If the D-Bus call fails
        """
        await self._ensure_manager_proxy()

        try:
            return await self._manager_proxy.call_list_units()  # type: ignore
        except DBusError as e:
            self._logger.error(
                'Failed to list systemd units: %s',
                e,
            )
            raise

    def get_unit(self, object_path: str) -> SystemdUnit:
        """Get a SystemdUnit instance for an object path.
        """
        return SystemdUnit(self._dbus_manager, object_path)
