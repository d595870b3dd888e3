from unitctl.systemd.adapter import (
    ServiceManagerAdapter,
    resolve_services_directory,
)

__all__ = [
    'ServiceManagerAdapter',
    'resolve_services_directory',
]
