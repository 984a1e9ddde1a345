"""Human readable helpers for the text fields of a snapshot."""

from __future__ import annotations

_UNITS = ("B", "KB", "MB", "GB", "TB", "PB")


def format_bytes(value: float | int | None, decimals: int = 2) -> str:
    """Render a byte count with a binary (1024) unit, e.g. ``1.50 KB``."""

    if not value or value <= 0:
        return "0 B"
    size = float(value)
    index = 0
    while size >= 1024 and index < len(_UNITS) - 1:
        size /= 1024
        index += 1
    if index == 0:
        return f"{int(size)} B"
    return f"{size:.{decimals}f} {_UNITS[index]}"


def format_percent(part: float | int, total: float | int) -> str:
    """Percentage of ``part`` over ``total`` with two decimals; ``0.00`` when total is 0."""

    if not total:
        return "0.00"
    return f"{(part / total) * 100:.2f}"
