from typing import Any, Self

from dbus_next.signature import Variant
from pydantic import BaseModel, Field


class DBusVariantValue(BaseModel):
    """Wrapper for D-Bus variant values.
    """
    model_config = {'frozen': True, 'arbitrary_types_allowed': True}

    value: Any = Field(..., description='The unwrapped D-Bus value')

    @classmethod
    def from_dbus_variant(cls, variant: Variant | Any | None) -> Self:
        """Create instance from a D-Bus variant or a plain value.
        """
        if isinstance(variant, Variant):
            return cls(value=variant.value)
        return cls(value=variant)
