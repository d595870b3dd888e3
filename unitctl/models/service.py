import shlex

from pydantic import BaseModel, Field


class ServiceRecord(BaseModel):
    """Live state of a service as reported by systemd.

    Args:
        name: Service name without the .service suffix
        is_active: Whether the unit is currently active
        is_enabled: Whether the unit file is enabled
        memory: Current memory usage in bytes, None if not accounted
    """
    model_config = {'frozen': True}

    name: str = Field(..., min_length=1)
    is_active: bool = Field(...)
    is_enabled: bool = Field(...)
    memory: int | None = Field(None, ge=0)


class CommandInvocation(BaseModel):
    """An external command that has been built but not executed.
    """
    model_config = {'frozen': True}

    program: str = Field(..., min_length=1, description='Executable name')
    args: tuple[str, ...] = Field(
        default=(),
        description='Arguments passed after the program name',
    )

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]

    def __str__(self) -> str:
        return shlex.join(self.argv)
