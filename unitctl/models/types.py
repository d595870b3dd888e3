from enum import StrEnum


class OperatingMode(StrEnum):
    """Scope of the service manager being driven.
    """

    SYSTEM = 'system'
    USER = 'user'


class SystemctlVerb(StrEnum):
    """Systemctl verbs issued by the adapter.
    """

    START = 'start'
    STOP = 'stop'
    RESTART = 'restart'
    RELOAD = 'reload'
    ENABLE = 'enable'
    DISABLE = 'disable'
    STATUS = 'status'
    DAEMON_RELOAD = 'daemon-reload'


class UnitFileState(StrEnum):
    """Systemd unit file states.
    """

    ENABLED = 'enabled'
    ENABLED_RUNTIME = 'enabled-runtime'
    LINKED = 'linked'
    LINKED_RUNTIME = 'linked-runtime'
    MASKED = 'masked'
    MASKED_RUNTIME = 'masked-runtime'
    STATIC = 'static'
    DISABLED = 'disabled'
    INVALID = 'invalid'


class UnitActiveState(StrEnum):
    """Systemd unit active states.
    """

    ACTIVE = 'active'
    RELOADING = 'reloading'
    INACTIVE = 'inactive'
    FAILED = 'failed'
    ACTIVATING = 'activating'
    DEACTIVATING = 'deactivating'


ENABLED_FILE_STATES = frozenset({
    UnitFileState.ENABLED,
    UnitFileState.ENABLED_RUNTIME,
})


class ServiceType(StrEnum):
    SIMPLE = 'simple'
    EXEC = 'exec'
    FORKING = 'forking'
    ONESHOT = 'oneshot'
    DBUS = 'dbus'
    NOTIFY = 'notify'
    IDLE = 'idle'


class RestartPolicy(StrEnum):
    NO = 'no'
    ALWAYS = 'always'
    ON_SUCCESS = 'on-success'
    ON_FAILURE = 'on-failure'
    ON_ABNORMAL = 'on-abnormal'
    ON_ABORT = 'on-abort'
    ON_WATCHDOG = 'on-watchdog'
