from __future__ import annotations

from collections import Counter
from datetime import datetime, timezone
from typing import Any

import pytest

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


class ManualClock:
    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeBackend:
    """In-memory TelemetryBackend with switchable failures."""

    def __init__(self, **overrides: Any) -> None:
        self.values: dict[str, Any] = {
            "cpu_usage": 12.5,
            "cpu_info": CpuInfo(model="Fake CPU 9000", cores=8),
            "memory_info": MemoryInfo(total=8 * 1024**3, used=2 * 1024**3, available=6 * 1024**3),
            "uptime": 3600.7,
            "load_average": (0.5, 0.25, 0.125),
            "disk_usage": DiskStats(path="/", total=1000, used=250, available=750, used_percent=25.0),
            "network_counters": [
                InterfaceCounters(name="eth0", rx_bytes=1000, tx_bytes=500),
            ],
            "temperature": 48.0,
            "battery": BatteryStatus(level=80.0, is_charging=True, time_left=0.0, voltage=12.1, cycle_count=3),
            "process_counts": ProcessCounts(all=10, running=2, blocked=1, sleeping=7),
            "file_systems": [
                FileSystemInfo(
                    device="/dev/sda1",
                    mount="/",
                    type="ext4",
                    size=1000,
                    used=250,
                    available=750,
                    use_percent=25.0,
                    inodes="10/100",
                    blocksize=4096,
                )
            ],
            "disk_layout": [
                DiskLayoutEntry(
                    device="/dev/sda",
                    name="FakeDisk",
                    vendor="ACME",
                    type="SSD",
                    size=512 * 1024**3,
                    removable=False,
                    interface="SATA",
                )
            ],
            "heap": HeapStats(rss=50 * 1024**2, vms=200 * 1024**2, rss_percent=0.6),
        }
        self.values.update(overrides)
        self.failures: set[str] = set()
        self.calls: Counter[str] = Counter()

    def _get(self, name: str) -> Any:
        self.calls[name] += 1
        if name in self.failures:
            raise RuntimeError(f"{name} unavailable")
        return self.values[name]

    def cpu_usage(self) -> float:
        return self._get("cpu_usage")

    def cpu_info(self) -> CpuInfo:
        return self._get("cpu_info")

    def memory_info(self) -> MemoryInfo:
        return self._get("memory_info")

    def uptime(self) -> float:
        return self._get("uptime")

    def load_average(self) -> tuple[float, float, float]:
        return self._get("load_average")

    def disk_usage(self, path: str = "/") -> DiskStats:
        return self._get("disk_usage")

    def network_counters(self) -> list[InterfaceCounters]:
        return self._get("network_counters")

    def temperature(self) -> float:
        return self._get("temperature")

    def battery(self) -> BatteryStatus | None:
        return self._get("battery")

    def process_counts(self) -> ProcessCounts:
        return self._get("process_counts")

    def file_systems(self) -> list[FileSystemInfo]:
        return self._get("file_systems")

    def disk_layout(self) -> list[DiskLayoutEntry]:
        return self._get("disk_layout")

    def heap(self) -> HeapStats:
        return self._get("heap")

    def fail_all(self) -> None:
        self.failures = set(self.values)


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def wall_clock():
    return lambda: datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)
