"""Capability interface between the aggregator and the host OS."""

from __future__ import annotations

from typing import Protocol

from sysstats.models import (
    BatteryStatus,
    CpuInfo,
    DiskLayoutEntry,
    DiskStats,
    FileSystemInfo,
    HeapStats,
    InterfaceCounters,
    MemoryInfo,
    ProcessCounts,
)

from .cpu import collect_cpu_info, collect_cpu_usage, collect_load_average
from .disk import collect_disk_layout, collect_disk_usage, collect_file_systems
from .memory import collect_memory_info
from .network import collect_network_counters
from .processes import collect_process_counts
from .sensors import collect_battery, collect_temperature
from .system import collect_heap_stats, collect_uptime


class TelemetryBackend(Protocol):
    """Every method is a blocking query that may raise on failure."""

    def cpu_usage(self) -> float: ...

    def cpu_info(self) -> CpuInfo: ...

    def memory_info(self) -> MemoryInfo: ...

    def uptime(self) -> float: ...

    def load_average(self) -> tuple[float, float, float]: ...

    def disk_usage(self, path: str = "/") -> DiskStats: ...

    def network_counters(self) -> list[InterfaceCounters]: ...

    def temperature(self) -> float: ...

    def battery(self) -> BatteryStatus | None: ...

    def process_counts(self) -> ProcessCounts: ...

    def file_systems(self) -> list[FileSystemInfo]: ...

    def disk_layout(self) -> list[DiskLayoutEntry]: ...

    def heap(self) -> HeapStats: ...


class PsutilBackend:
    """psutil-backed implementation; psutil hides the per-platform differences."""

    def cpu_usage(self) -> float:
        return collect_cpu_usage()

    def cpu_info(self) -> CpuInfo:
        return collect_cpu_info()

    def memory_info(self) -> MemoryInfo:
        return collect_memory_info()

    def uptime(self) -> float:
        return collect_uptime()

    def load_average(self) -> tuple[float, float, float]:
        return collect_load_average()

    def disk_usage(self, path: str = "/") -> DiskStats:
        return collect_disk_usage(path)

    def network_counters(self) -> list[InterfaceCounters]:
        return collect_network_counters()

    def temperature(self) -> float:
        return collect_temperature()

    def battery(self) -> BatteryStatus | None:
        return collect_battery()

    def process_counts(self) -> ProcessCounts:
        return collect_process_counts()

    def file_systems(self) -> list[FileSystemInfo]:
        return collect_file_systems()

    def disk_layout(self) -> list[DiskLayoutEntry]:
        return collect_disk_layout()

    def heap(self) -> HeapStats:
        return collect_heap_stats()
