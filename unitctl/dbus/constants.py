from enum import StrEnum
from typing import Final


class DBusConstants(StrEnum):
    """Standard D-Bus service and interface constants.
    """

    # D-Bus daemon service constants
    SERVICE_NAME = 'org.freedesktop.DBus'
    OBJECT_PATH = '/org/freedesktop/DBus'
    INTERFACE = 'org.freedesktop.DBus'

    # Standard D-Bus interface for properties access
    PROPERTIES_INTERFACE = 'org.freedesktop.DBus.Properties'


class SystemdDBusConstants(StrEnum):
    """Systemd D-Bus service and interface constants.
    """

    SERVICE_NAME = 'org.freedesktop.systemd1'
    OBJECT_PATH = '/org/freedesktop/systemd1'

    MANAGER_INTERFACE = 'org.freedesktop.systemd1.Manager'
    UNIT_INTERFACE = 'org.freedesktop.systemd1.Unit'
    SERVICE_INTERFACE = 'org.freedesktop.systemd1.Service'


class UnitPropertyNames(StrEnum):
    """Property names of the Unit interface.
    """

    ID = 'Id'
    ACTIVE_STATE = 'ActiveState'
    UNIT_FILE_STATE = 'UnitFileState'


class ServicePropertyNames(StrEnum):
    """Property names of the Service interface.
    """

    MEMORY_CURRENT = 'MemoryCurrent'


class ListUnitsFields:
    """Field positions in a ListUnits() entry.
    """

    NAME: Final[int] = 0
    ACTIVE_STATE: Final[int] = 3
    OBJECT_PATH: Final[int] = 6
    FIELD_COUNT: Final[int] = 10


# systemd reports (uint64)-1 when a value is not set
UINT64_NOT_SET: Final[int] = 2**64 - 1


class ConnectionConfig:
    """Configuration constants for D-Bus connection.
    """

    DEFAULT_MAX_RETRIES: Final[int] = 5
    DEFAULT_INITIAL_BACKOFF: Final[float] = 1.0
    BACKOFF_MULTIPLIER: Final[float] = 2.0
