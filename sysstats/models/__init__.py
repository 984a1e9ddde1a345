"""Typed records shared by collectors, the aggregator and the web layer."""

from .results import Failed, MetricResult, MetricUnavailable, Ok, value_or_default
from .samples import CacheEntry, CpuSample, MemorySample, NetworkSample, RateSample
from .snapshot import (
    BatteryStatus,
    CpuInfo,
    DiskLayoutEntry,
    DiskStats,
    FileSystemInfo,
    HeapStats,
    InterfaceCounters,
    MemoryInfo,
    NetworkSpeed,
    ProcessCounts,
    Snapshot,
    SystemTime,
)

__all__ = [
    "BatteryStatus",
    "CacheEntry",
    "CpuInfo",
    "CpuSample",
    "DiskLayoutEntry",
    "DiskStats",
    "Failed",
    "FileSystemInfo",
    "HeapStats",
    "InterfaceCounters",
    "MemoryInfo",
    "MemorySample",
    "MetricResult",
    "MetricUnavailable",
    "NetworkSample",
    "NetworkSpeed",
    "Ok",
    "ProcessCounts",
    "RateSample",
    "Snapshot",
    "SystemTime",
    "value_or_default",
]
