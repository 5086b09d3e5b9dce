"""Utility functions for CLI operations."""


def format_size(size: int) -> str:
    """
    Format a size in bytes (or characters) to human-readable form.

    Uses binary units (1024-based) and automatically selects the most
    appropriate unit (B, KiB, MiB, GiB, TiB).

    Args:
        size: Size in bytes

    Returns:
        Formatted string with size and unit (e.g., "1.50 MiB", "512 B")
    """
    if size < 1024:
        return f"{size} B"

    units = ['KiB', 'MiB', 'GiB', 'TiB']
    value = size / 1024.0

    for unit in units:
        if value < 1024.0:
            return f"{value:.2f} {unit}"
        value /= 1024.0

    return f"{value:.2f} PiB"
