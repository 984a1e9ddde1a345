"""Core utilities for sysstats."""

from __future__ import annotations

from .config import APP_NAME, CACHE, HISTORY, RATE, SECURITY, SERVER
from .formatting import format_bytes, format_percent

__all__ = [
    "APP_NAME",
    "CACHE",
    "HISTORY",
    "RATE",
    "SECURITY",
    "SERVER",
    "format_bytes",
    "format_percent",
]
