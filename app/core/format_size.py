"""Human-readable byte sizes for file captions and listings."""

_UNITS = ("KB", "MB", "GB", "TB")


def format_size(size: int) -> str:
    """Format a byte count with 1024-based units, one decimal above bytes."""
    if size < 1024:
        return f"{size} B"
    value = float(size)
    for unit in _UNITS[:-1]:
        value /= 1024
        if value < 1024:
            return f"{value:.1f} {unit}"
    return f"{value / 1024:.1f} {_UNITS[-1]}"
