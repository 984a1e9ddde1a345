"""Web surface for sysstats."""

from __future__ import annotations

__all__ = [
    "AggregatorRunner",
    "create_app",
]

from .runner import AggregatorRunner  # noqa: E402
from .server import create_app  # noqa: E402
