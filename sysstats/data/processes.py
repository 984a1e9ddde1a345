"""Process counts grouped by scheduler state."""

from __future__ import annotations

import psutil

from sysstats.models import ProcessCounts

_BLOCKED_STATES = {
    psutil.STATUS_STOPPED,
    psutil.STATUS_DISK_SLEEP,
    psutil.STATUS_TRACING_STOP,
}


def collect_process_counts() -> ProcessCounts:
    counts = ProcessCounts()
    for proc in psutil.process_iter(attrs=["status"]):
        status = proc.info.get("status")
        counts.all += 1
        if status == psutil.STATUS_RUNNING:
            counts.running += 1
        elif status in _BLOCKED_STATES:
            counts.blocked += 1
        elif status in (psutil.STATUS_SLEEPING, psutil.STATUS_IDLE):
            counts.sleeping += 1
    return counts
