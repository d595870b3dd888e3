import logging
from typing import Any, Self

from dbus_next.constants import BusType
from dbus_next.errors import DBusError

from unitctl.dbus.connection import DBusConnectionManager
from unitctl.dbus.constants import (
    UINT64_NOT_SET,
    ListUnitsFields,
    ServicePropertyNames,
    SystemdDBusConstants,
    UnitPropertyNames,
)
from unitctl.dbus.interfaces import ServiceQuery
from unitctl.dbus.manager import SystemdManager
from unitctl.dbus.unit import SystemdUnit
from unitctl.exceptions import ServiceQueryError
from unitctl.models.service import ServiceRecord
from unitctl.models.types import (
    ENABLED_FILE_STATES,
    OperatingMode,
    UnitActiveState,
)
from unitctl.system.constants import SERVICE_SUFFIX


class ServiceRecordFactory:
    """Factory for creating ServiceRecord instances from unit properties.
    """

    @staticmethod
    def create(
        unit_name: str,
        unit_properties: dict[str, Any],
        service_properties: dict[str, Any],
    ) -> ServiceRecord:
        """Create a ServiceRecord from Unit and Service interface properties.

        Args:
            unit_name: Unit name as listed by systemd (e.g. 'sshd.service')
            unit_properties: Properties of the Unit interface
            service_properties: Properties of the Service interface

        Returns:
            ServiceRecord describing the unit
        """
        active_state = unit_properties.get(UnitPropertyNames.ACTIVE_STATE, '')
        file_state = unit_properties.get(UnitPropertyNames.UNIT_FILE_STATE, '')
        memory = service_properties.get(ServicePropertyNames.MEMORY_CURRENT)

        if memory == UINT64_NOT_SET:
            memory = None

        return ServiceRecord(
            name=unit_name.removesuffix(SERVICE_SUFFIX),
            is_active=active_state == UnitActiveState.ACTIVE,
            is_enabled=file_state in ENABLED_FILE_STATES,
            memory=memory,
        )


class DBusServiceQuery(ServiceQuery):
    """Queries service state from systemd over D-Bus.
    """

    def __init__(self, systemd_manager: SystemdManager) -> None:
        """Initialize with the systemd manager used for unit lookups.
        """
        self._logger = logging.getLogger(__name__)

        self._systemd_manager = systemd_manager

    @classmethod
    def for_mode(cls, mode: OperatingMode) -> Self:
        """Create a query bound to the bus matching the operating mode.
        """
        bus_type = BusType.SESSION if mode == OperatingMode.USER \
            else BusType.SYSTEM
        dbus_manager = DBusConnectionManager.get_instance(bus_type)
        return cls(SystemdManager(dbus_manager))

    async def list_services(self) -> list[ServiceRecord]:
        """List all loaded service units with their state.

        Units are queried one after another; any failure aborts the whole
        listing.

        Raises:
            ServiceQueryError: If systemd cannot be queried
        """
        try:
            units = await self._systemd_manager.list_units()
        except (DBusError, ConnectionError) as e:
            raise ServiceQueryError(f'Failed to list units: {e}') from e

        services = []
        for unit_data in units:
            unit_name = unit_data[ListUnitsFields.NAME]
            if not unit_name.endswith(SERVICE_SUFFIX):
                continue

            unit = self._systemd_manager.get_unit(
                unit_data[ListUnitsFields.OBJECT_PATH]
            )
            services.append(await self._build_record(unit_name, unit))

        self._logger.debug('Queried %d services', len(services))
        return services

    async def _build_record(
        self,
        unit_name: str,
        unit: SystemdUnit,
    ) -> ServiceRecord:
        try:
            unit_properties = await unit.get_all_properties(
                SystemdDBusConstants.UNIT_INTERFACE
            )
            memory = await unit.get_property(
                SystemdDBusConstants.SERVICE_INTERFACE,
                ServicePropertyNames.MEMORY_CURRENT,
            )
        except (DBusError, ConnectionError) as e:
            self._logger.warning(
                'Failed to query service %s: %s',
                unit_name,
                e,
            )
            raise ServiceQueryError(
                f'Failed to query service {unit_name}: {e}'
            ) from e

        return ServiceRecordFactory.create(
            unit_name,
            unit_properties,
            {ServicePropertyNames.MEMORY_CURRENT: memory},
        )
