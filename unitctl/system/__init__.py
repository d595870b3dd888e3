from unitctl.system.constants import BootTargets, SystemdPaths
from unitctl.system.runner import CommandRunner
from unitctl.system.unit_file import parse_unit, render_unit

__all__ = [
    'BootTargets',
    'CommandRunner',
    'SystemdPaths',
    'parse_unit',
    'render_unit',
]
