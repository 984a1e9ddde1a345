"""Memory data collection."""

from __future__ import annotations

import psutil

from sysstats.models import MemoryInfo


def collect_memory_info() -> MemoryInfo:
    mem = psutil.virtual_memory()
    return MemoryInfo(
        total=int(mem.total),
        used=int(mem.total - mem.available),
        available=int(mem.available),
    )
