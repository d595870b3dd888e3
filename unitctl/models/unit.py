from collections.abc import Iterator
from enum import StrEnum

from pydantic import BaseModel, Field, field_validator

UnitEntries = list[tuple[str, str]]


class UnitSection(StrEnum):
    """Sections of a service unit file, in emission order.
    """

    UNIT = 'Unit'
    SERVICE = 'Service'
    INSTALL = 'Install'


class UnitModel(BaseModel):
    """Service unit definition.

    Each section is an ordered list of (key, value) pairs. Keys may repeat,
    e.g. several WantedBy= entries.

    Args:
        unit: Entries of the [Unit] section
        service: Entries of the [Service] section
        install: Entries of the [Install] section
    """
    model_config = {'frozen': True}

    unit: UnitEntries = Field(default_factory=list)
    service: UnitEntries = Field(default_factory=list)
    install: UnitEntries = Field(default_factory=list)

    @field_validator('unit', 'service', 'install')
    @classmethod
    def validate_entries(cls, v: UnitEntries) -> UnitEntries:
        for key, value in v:
            stripped = key.strip()
            if not stripped:
                raise ValueError('Unit entry key cannot be empty')
            if stripped != key:
                raise ValueError(
                    f'Unit entry key has surrounding whitespace: {key!r}'
                )
            if any(c in key for c in '=[\r\n'):
                raise ValueError(f'Invalid unit entry key: {key!r}')
            if key[0] in '#;':
                raise ValueError(
                    f'Unit entry key cannot start a comment: {key!r}'
                )
            if '\n' in value or '\r' in value:
                raise ValueError(
                    f'Value for {key} cannot contain line breaks'
                )
        # systemd ignores whitespace around values
        return [(key, value.strip()) for key, value in v]

    def entries(self, section: UnitSection) -> UnitEntries:
        """Return the entries of a section.
        """
        match section:
            case UnitSection.UNIT:
                return self.unit
            case UnitSection.SERVICE:
                return self.service
            case UnitSection.INSTALL:
                return self.install

    def sections(self) -> Iterator[tuple[UnitSection, UnitEntries]]:
        """Iterate over sections in emission order.
        """
        for section in UnitSection:
            yield section, self.entries(section)

    def get(self, section: UnitSection, key: str) -> list[str]:
        """Return every value stored under key, in order.
        """
        return [v for k, v in self.entries(section) if k == key]
