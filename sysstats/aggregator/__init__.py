"""Snapshot aggregation engine."""

from .adapter import MetricSourceAdapter
from .cache import TTLCache
from .engine import DEFAULTS, SnapshotAggregator
from .history import HistoryBuffer
from .rate import RateEstimator

__all__ = [
    "DEFAULTS",
    "HistoryBuffer",
    "MetricSourceAdapter",
    "RateEstimator",
    "SnapshotAggregator",
    "TTLCache",
]
