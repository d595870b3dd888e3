import logging

from unitctl.exceptions import UnitFileParseError
from unitctl.models.unit import UnitModel, UnitSection

logger = logging.getLogger(__name__)

COMMENT_PREFIXES = ('#', ';')


def render_unit(unit: UnitModel) -> str:
    """Render a unit definition as unit file text.

    Sections are always written as [Unit], [Service], [Install], each
    followed by its entries in stored order.
    """
    sections = []

    for section, entries in unit.sections():
        lines = [f'[{section}]']
        lines.extend(f'{key}={value}' for key, value in entries)
        sections.append('\n'.join(lines))

    return '\n\n'.join(sections) + '\n'


def parse_unit(content: str) -> UnitModel:
    """Parse unit file text into a unit definition.

    Args:
        content: Unit file text

    Returns:
        UnitModel with entries in file order

    Raises:
        UnitFileParseError: On unknown sections or malformed lines
    """
    entries: dict[UnitSection, list[tuple[str, str]]] = {
        section: [] for section in UnitSection
    }
    current: UnitSection | None = None

    # systemd only breaks lines on \n
    for line_number, raw_line in enumerate(content.split('\n'), start=1):
        line = raw_line.removesuffix('\r').strip()
        if not line or line.startswith(COMMENT_PREFIXES):
            continue

        if line.startswith('[') and line.endswith(']'):
            current = _parse_section_header(line, line_number)
            continue

        if current is None:
            raise UnitFileParseError(
                line_number,
                'Entry found before any section header',
            )

        key, separator, value = line.partition('=')
        if not separator or not key.strip():
            raise UnitFileParseError(
                line_number,
                f'Expected key=value, got {line!r}',
            )

        entries[current].append((key.strip(), value.strip()))

    logger.debug(
        'Parsed unit file with %d entries',
        sum(len(v) for v in entries.values()),
    )

    return UnitModel(
        unit=entries[UnitSection.UNIT],
        service=entries[UnitSection.SERVICE],
        install=entries[UnitSection.INSTALL],
    )


def _parse_section_header(line: str, line_number: int) -> UnitSection:
    name = line[1:-1].strip()
    try:
        return UnitSection(name)
    except ValueError:
        raise UnitFileParseError(
            line_number,
            f'Unknown section [{name}]',
        ) from None
