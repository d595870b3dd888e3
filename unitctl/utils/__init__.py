from unitctl.utils.formatting import format_flag, format_memory

__all__ = [
    'format_flag',
    'format_memory',
]
