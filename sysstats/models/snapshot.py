"""Dataclasses representing one aggregated telemetry snapshot."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from sysstats.core.formatting import format_bytes


@dataclass(slots=True)
class CpuInfo:
    model: str
    cores: int


@dataclass(slots=True)
class MemoryInfo:
    total: int
    used: int
    available: int


@dataclass(slots=True)
class DiskStats:
    path: str
    total: int
    used: int
    available: int
    used_percent: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "total": format_bytes(self.total),
            "used": format_bytes(self.used),
            "available": format_bytes(self.available),
            "usedPercent": f"{self.used_percent:.2f}%",
            "rawTotal": self.total,
            "rawUsed": self.used,
            "rawAvailable": self.available,
        }


@dataclass(slots=True)
class InterfaceCounters:
    name: str
    rx_bytes: int
    tx_bytes: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "interface": self.name,
            "inputBytes": format_bytes(self.rx_bytes),
            "outputBytes": format_bytes(self.tx_bytes),
            "totalBytes": format_bytes(self.rx_bytes + self.tx_bytes),
            "rawInputBytes": self.rx_bytes,
            "rawOutputBytes": self.tx_bytes,
        }


@dataclass(slots=True)
class NetworkSpeed:
    download: float = 0.0
    upload: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "download": f"{format_bytes(self.download)}/s",
            "upload": f"{format_bytes(self.upload)}/s",
            "downloadRaw": self.download,
            "uploadRaw": self.upload,
        }


@dataclass(slots=True)
class BatteryStatus:
    level: float
    is_charging: bool
    time_left: float
    voltage: float
    cycle_count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level,
            "isCharging": self.is_charging,
            "timeLeft": self.time_left,
            "voltage": self.voltage,
            "cycleCount": self.cycle_count,
        }


@dataclass(slots=True)
class ProcessCounts:
    all: int = 0
    running: int = 0
    blocked: int = 0
    sleeping: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "all": self.all,
            "running": self.running,
            "blocked": self.blocked,
            "sleeping": self.sleeping,
        }


@dataclass(slots=True)
class FileSystemInfo:
    device: str
    mount: str
    type: str
    size: int
    used: int
    available: int
    use_percent: float
    inodes: str = "N/A"
    blocksize: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "device": self.device,
            "mount": self.mount,
            "type": self.type or "Unknown",
            "size": format_bytes(self.size),
            "used": format_bytes(self.used),
            "available": format_bytes(self.available),
            "usePercent": f"{self.use_percent:.2f}%",
            "inodes": self.inodes,
            "blocksize": format_bytes(self.blocksize) if self.blocksize else "N/A",
        }


@dataclass(slots=True)
class DiskLayoutEntry:
    device: str
    name: str
    vendor: str
    type: str
    size: int
    removable: bool
    interface: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "device": self.device,
            "name": self.name,
            "vendor": self.vendor,
            "type": self.type,
            "size": format_bytes(self.size),
            "rawSize": self.size,
            "removable": self.removable,
            "interfaceType": self.interface,
        }


@dataclass(slots=True)
class HeapStats:
    rss: int
    vms: int
    rss_percent: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "rss": format_bytes(self.rss),
            "vms": format_bytes(self.vms),
            "rawRss": self.rss,
            "rawVms": self.vms,
            "rssPercent": f"{self.rss_percent:.2f}",
        }


@dataclass(slots=True)
class SystemTime:
    time: str
    date: str
    timezone: str
    timestamp: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "time": self.time,
            "date": self.date,
            "timezone": self.timezone,
            "timestamp": self.timestamp,
        }


def _optional(record: Any) -> Any:
    return record.to_dict() if record is not None else None


@dataclass(slots=True)
class Snapshot:
    """The record returned by one aggregation pass.

    History series are copies taken at the end of the pass; mutating them
    does not affect the aggregator.
    """

    cpu_usage: float
    cpu_name: str
    cpu_cores: int
    memory: MemoryInfo
    memory_percent: str
    uptime: int
    platform: str
    architecture: str
    hostname: str
    load_average: tuple[float, float, float]
    temperature: float | None
    disk: DiskStats | None
    network: list[InterfaceCounters]
    cpu_history: list[Any]
    memory_history: list[Any]
    network_history: list[Any]
    heap: HeapStats | None
    process_count: ProcessCounts
    file_system_info: list[FileSystemInfo]
    network_speed: NetworkSpeed
    battery_status: BatteryStatus | None
    system_time: SystemTime
    disk_layout: list[DiskLayoutEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        used = format_bytes(self.memory.used)
        total = format_bytes(self.memory.total)
        return {
            "cpu": f"{self.cpu_usage:.2f}%",
            "cpu_name": self.cpu_name,
            "ram": f"{self.memory_percent}%",
            "ram_text": f"{used} / {total} ({self.memory_percent}%)",
            "uptime": self.uptime,
            "platform": self.platform,
            "architecture": self.architecture,
            "cpu_cores": self.cpu_cores,
            "hostname": self.hostname,
            "load_average": list(self.load_average),
            "temperature": f"{self.temperature:.1f}°C" if self.temperature is not None else None,
            "disk": _optional(self.disk),
            "network": [iface.to_dict() for iface in self.network],
            "cpu_history": [sample.to_dict() for sample in self.cpu_history],
            "memory_history": [sample.to_dict() for sample in self.memory_history],
            "network_history": [sample.to_dict() for sample in self.network_history],
            "heap": _optional(self.heap),
            "process_count": self.process_count.to_dict(),
            "file_system_info": [fs.to_dict() for fs in self.file_system_info],
            "network_speed": self.network_speed.to_dict(),
            "battery_status": _optional(self.battery_status),
            "system_time": self.system_time.to_dict(),
            "disk_layout": [disk.to_dict() for disk in self.disk_layout],
        }
