"""Host identity, uptime and the aggregator process's own memory."""

from __future__ import annotations

import platform
import socket
import time
from datetime import datetime, timezone

import psutil

from sysstats.models import HeapStats, SystemTime


def collect_uptime() -> float:
    return max(0.0, time.time() - float(psutil.boot_time()))


def host_identity() -> tuple[str, str, str]:
    """``(platform, architecture, hostname)`` in the lowercase style of ``sys.platform``."""

    uname = platform.uname()
    hostname = getattr(uname, "node", None) or socket.gethostname()
    return (platform.system().lower() or "unknown", uname.machine or "unknown", hostname)


def collect_heap_stats() -> HeapStats:
    proc = psutil.Process()
    info = proc.memory_info()
    return HeapStats(
        rss=int(info.rss),
        vms=int(info.vms),
        rss_percent=float(proc.memory_percent()),
    )


def system_time(now: datetime | None = None) -> SystemTime:
    now = now or datetime.now(timezone.utc)
    local = now.astimezone()
    return SystemTime(
        time=local.strftime("%H:%M:%S"),
        date=local.strftime("%Y-%m-%d"),
        timezone=local.tzname() or "UTC",
        timestamp=now.astimezone(timezone.utc).isoformat(),
    )
