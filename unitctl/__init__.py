from unitctl.models import (
    CommandInvocation,
    OperatingMode,
    ServiceRecord,
    UnitModel,
    UnitSection,
)
from unitctl.systemd import ServiceManagerAdapter

__all__ = [
    'CommandInvocation',
    'OperatingMode',
    'ServiceManagerAdapter',
    'ServiceRecord',
    'UnitModel',
    'UnitSection',
]
