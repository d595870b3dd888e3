from unitctl.dbus.adapters import DBusServiceQuery, ServiceRecordFactory
from unitctl.dbus.connection import DBusConnectionManager
from unitctl.dbus.interfaces import ServiceQuery
from unitctl.dbus.manager import SystemdManager
from unitctl.dbus.types import DBusVariantValue
from unitctl.dbus.unit import SystemdUnit

__all__ = [
    'DBusConnectionManager',
    'DBusServiceQuery',
    'DBusVariantValue',
    'ServiceQuery',
    'ServiceRecordFactory',
    'SystemdManager',
    'SystemdUnit',
]
