from enum import StrEnum
from typing import Final

SYSTEMCTL: Final[str] = 'systemctl'
USER_SCOPE_FLAG: Final[str] = '--user'
SERVICE_SUFFIX: Final[str] = '.service'


class SystemdPaths(StrEnum):
    """Systemd directory paths.
    """

    # System-level unit directory
    SYSTEM_UNIT_DIR = '/etc/systemd/system'

    # User-level unit directory (relative to home)
    USER_CONFIG_DIR = '.config/systemd/user'


class BootTargets(StrEnum):
    """Default boot targets services are wanted by.
    """

    SYSTEM = 'multi-user.target'
    USER = 'default.target'
