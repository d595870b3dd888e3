import re
import shlex
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from unitctl.models.types import RestartPolicy, ServiceType
from unitctl.models.unit import UnitModel

SERVICE_NAME_PATTERN = re.compile(r'^[a-zA-Z0-9:_.\\@-]+$')


def validate_service_name(name: str) -> str:
    """Validate a service name given without the .service suffix.

    Raises:
        ValueError: If the name is not a valid systemd unit name
    """
    if not name or len(name) > 248:
        raise ValueError('Service name must be between 1 and 248 characters')

    if not SERVICE_NAME_PATTERN.match(name):
        raise ValueError(
            'Service name contains invalid characters. '
            'Use only letters, numbers, :, _, ., \\, @, -'
        )

    if name.startswith('.') or name.endswith('.'):
        raise ValueError('Service name cannot start or end with a dot')

    return name


class ServiceConfig(BaseModel):
    """Configuration of a service to install.

    Args:
        name: Service name without the .service suffix
        exec_start: Command to execute
        description: Unit description
        user: User to run service as
        group: Group to run service as
        working_directory: Working directory
        environment: Environment variables, in order
        type: Service type
        restart: Restart policy
        wanted_by: Targets that want the service
    """
    model_config = {'frozen': True}

    name: str = Field(...)
    exec_start: str = Field(..., min_length=1)
    description: str | None = Field(None)
    user: str | None = Field(None)
    group: str | None = Field(None)
    working_directory: Path | None = Field(None)
    environment: list[tuple[str, str]] = Field(default_factory=list)
    type: ServiceType = Field(ServiceType.SIMPLE)
    restart: RestartPolicy = Field(RestartPolicy.ON_FAILURE)
    wanted_by: list[str] = Field(default_factory=list)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        return validate_service_name(v)

    @field_validator('exec_start')
    @classmethod
    def validate_command(cls, v: str) -> str:
        try:
            shlex.split(v)
        except ValueError as e:
            raise ValueError(f'Invalid command format: {e}')
        return v

    @field_validator('working_directory')
    @classmethod
    def validate_working_directory(cls, v: Path | None) -> Path | None:
        if v is not None and not v.is_dir():
            raise ValueError(f'Working directory does not exist: {v}')
        return v

    @field_validator('environment')
    @classmethod
    def validate_environment(
        cls,
        v: list[tuple[str, str]],
    ) -> list[tuple[str, str]]:
        for key, _ in v:
            if not key or any(c in '="\\' or c.isspace() for c in key):
                raise ValueError(f'Invalid environment variable name: {key!r}')
        return v

    def to_unit(self, default_target: str) -> UnitModel:
        """Build the unit definition for this service.

        Args:
            default_target: Target used when wanted_by is empty
        """
        unit = [('Description', self.description or f'{self.name} service')]

        service = [
            ('Type', self.type.value),
            ('ExecStart', self.exec_start),
        ]
        if self.user:
            service.append(('User', self.user))
        if self.group:
            service.append(('Group', self.group))
        if self.working_directory:
            service.append(('WorkingDirectory', str(self.working_directory)))
        for key, value in self.environment:
            value = value.replace('\\', '\\\\').replace('"', '\\"')
            service.append(('Environment', f'"{key}={value}"'))
        if self.restart != RestartPolicy.NO:
            service.append(('Restart', self.restart.value))

        install = [
            ('WantedBy', target)
            for target in self.wanted_by or [default_target]
        ]

        return UnitModel(unit=unit, service=service, install=install)
