MEMORY_UNITS = ('B', 'K', 'M', 'G', 'T')


def format_memory(memory: int | None) -> str:
    """Format a byte count the way systemctl does (e.g. 1.5M).
    """
    if memory is None:
        return '-'

    value = float(memory)
    for unit in MEMORY_UNITS:
        if value < 1024 or unit == MEMORY_UNITS[-1]:
            break
        value /= 1024

    if unit == 'B':
        return f'{memory}B'
    return f'{value:.1f}{unit}'


def format_flag(flag: bool) -> str:
    return 'yes' if flag else 'no'
