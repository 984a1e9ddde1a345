"""Disk usage, mounted file systems and physical disk layout."""

from __future__ import annotations

import os
from pathlib import Path

import psutil

from sysstats.models import DiskLayoutEntry, DiskStats, FileSystemInfo, MetricUnavailable

_SYS_BLOCK = Path("/sys/block")
_SECTOR_SIZE = 512
_VIRTUAL_PREFIXES = ("loop", "ram", "zram", "dm-", "md", "sr", "fd")


def collect_disk_usage(path: str = "/") -> DiskStats:
    usage = psutil.disk_usage(path)
    return DiskStats(
        path=path,
        total=int(usage.total),
        used=int(usage.used),
        available=int(usage.free),
        used_percent=float(usage.percent),
    )


def _inodes(mountpoint: str) -> tuple[str, int | None]:
    try:
        stat = os.statvfs(mountpoint)
    except (OSError, AttributeError):
        return "N/A", None
    if not stat.f_files:
        return "N/A", stat.f_bsize or None
    used = stat.f_files - stat.f_ffree
    return f"{used}/{stat.f_files}", stat.f_bsize or None


def collect_file_systems() -> list[FileSystemInfo]:
    """Size and inode usage of every mounted physical file system."""

    systems: list[FileSystemInfo] = []
    seen: set[str] = set()
    for part in psutil.disk_partitions(all=False):
        if part.mountpoint in seen:
            continue
        seen.add(part.mountpoint)
        try:
            usage = psutil.disk_usage(part.mountpoint)
        except (PermissionError, OSError):  # pragma: no cover - mountpoint permissions
            continue
        inodes, blocksize = _inodes(part.mountpoint)
        systems.append(
            FileSystemInfo(
                device=part.device,
                mount=part.mountpoint,
                type=part.fstype or "Unknown",
                size=int(usage.total),
                used=int(usage.used),
                available=int(usage.free),
                use_percent=float(usage.percent),
                inodes=inodes,
                blocksize=blocksize,
            )
        )
    # root first, like the dashboard expects
    systems.sort(key=lambda fs: (fs.mount not in ("/", "C:\\"), fs.mount))
    return systems


def _read_text(path: Path) -> str | None:
    try:
        value = path.read_text(encoding="utf-8", errors="replace").strip()
    except OSError:
        return None
    return value or None


def _interface_type(name: str, device_dir: Path) -> str:
    if name.startswith("nvme"):
        return "NVMe"
    if name.startswith("mmcblk"):
        return "SD"
    if name.startswith("vd"):
        return "Virtio"
    try:
        resolved = str((device_dir / "device").resolve())
    except OSError:
        return "Unknown"
    if "/usb" in resolved:
        return "USB"
    if "/ata" in resolved:
        return "SATA"
    return "SCSI" if name.startswith("sd") else "Unknown"


def collect_disk_layout() -> list[DiskLayoutEntry]:
    """Physical block devices from ``/sys/block`` (Linux only)."""

    if not _SYS_BLOCK.exists():
        raise MetricUnavailable("/sys/block not available on this platform")
    disks: list[DiskLayoutEntry] = []
    for entry in sorted(_SYS_BLOCK.iterdir()):
        name = entry.name
        if name.startswith(_VIRTUAL_PREFIXES):
            continue
        sectors = _read_text(entry / "size")
        size = int(sectors) * _SECTOR_SIZE if sectors and sectors.isdigit() else 0
        if size == 0:
            continue
        rotational = _read_text(entry / "queue" / "rotational")
        disks.append(
            DiskLayoutEntry(
                device=f"/dev/{name}",
                name=_read_text(entry / "device" / "model") or name,
                vendor=_read_text(entry / "device" / "vendor") or "",
                type="HD" if rotational == "1" else "SSD",
                size=size,
                removable=_read_text(entry / "removable") == "1",
                interface=_interface_type(name, entry),
            )
        )
    return disks
