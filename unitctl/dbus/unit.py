import logging
from typing import Any

from dbus_next.errors import DBusError

from unitctl.dbus.connection import DBusConnectionManager
from unitctl.dbus.constants import DBusConstants, SystemdDBusConstants
from unitctl.dbus.types import DBusVariantValue


class SystemdUnit:
    """Represents a systemd unit.

    Provides read access to its D-Bus properties.
    """

    def __init__(self, dbus_manager: DBusConnectionManager, object_path: str):
        """Initialize a SystemdUnit instance.

        Args:
            dbus_manager: The D-Bus connection manager
            object_path: The D-Bus object path for this unit
        """
        self._logger = logging.getLogger(__name__)

        self._dbus_manager = dbus_manager
        self._object_path = object_path
        self._properties_interface = None

    @property
    def object_path(self) -> str:
        return self._object_path

    async def _ensure_properties_interface(self) -> None:
        """Ensure the D-Bus properties interface is initialized.
        """
        if self._properties_interface is not None:
            return

        try:
            bus = await self._dbus_manager.get_bus()
            introspection = await bus.introspect(
                SystemdDBusConstants.SERVICE_NAME,
                self._object_path,
            )
            proxy_object = bus.get_proxy_object(
                SystemdDBusConstants.SERVICE_NAME,
                self._object_path,
                introspection,
            )
            self._properties_interface = proxy_object.get_interface(
                DBusConstants.PROPERTIES_INTERFACE
            )
        except DBusError as e:
            self._logger.error(
                'Failed to create proxy for unit %s: %s',
                self._object_path,
                e,
            )
            raise

    async def get_property(self, interface: str, property_name: str) -> Any:
        """Get a single property from the unit.

        Args:
            interface: The D-Bus interface name
            property_name: The property name to retrieve

        Returns:
            The property value

        Raises:
            DBusError: If the D-Bus call fails
        """
        await self._ensure_properties_interface()

        try:
            variant = await self._properties_interface.call_get(  # type: ignore
                interface,
                property_name,
            )
            return DBusVariantValue.from_dbus_variant(variant).value
        except DBusError as e:
            self._logger.warning(
                'Failed to get property %s.%s for unit %s: %s',
                interface,
                property_name,
                self._object_path,
                e,
            )
            raise

    async def get_all_properties(self, interface: str) -> dict[str, Any]:
        """Get all properties from a specific interface.

        Raises:
            DBusError: If the D-Bus call fails
        """
        await self._ensure_properties_interface()

        try:
            raw_properties = await self._properties_interface.call_get_all(  # type: ignore
                interface
            )
        except DBusError as e:
            self._logger.warning(
                'Failed to get all properties for interface %s on unit %s: %s',
                interface,
                self._object_path,
                e,
            )
            raise

        return {
            name: DBusVariantValue.from_dbus_variant(variant).value
            for name, variant in raw_properties.items()
        }
