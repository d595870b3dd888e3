from unitctl.models.service import CommandInvocation, ServiceRecord
from unitctl.models.service_config import ServiceConfig, validate_service_name
from unitctl.models.types import (
    OperatingMode,
    RestartPolicy,
    ServiceType,
    SystemctlVerb,
    UnitActiveState,
    UnitFileState,
)
from unitctl.models.unit import UnitEntries, UnitModel, UnitSection

__all__ = [
    'CommandInvocation',
    'OperatingMode',
    'RestartPolicy',
    'ServiceConfig',
    'ServiceRecord',
    'ServiceType',
    'SystemctlVerb',
    'UnitActiveState',
    'UnitEntries',
    'UnitFileState',
    'UnitModel',
    'UnitSection',
    'validate_service_name',
]
