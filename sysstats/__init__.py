"""System telemetry aggregator."""

from __future__ import annotations

__all__ = [
    "SnapshotAggregator",
    "aggregator",
    "core",
    "data",
    "models",
]

__version__ = "0.1.0"

from .aggregator import SnapshotAggregator  # noqa: E402
from . import aggregator, core, data, models  # noqa: E402
