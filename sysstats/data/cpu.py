"""CPU data collection utilities."""

from __future__ import annotations

import os
import platform
from pathlib import Path

import psutil

from sysstats.models import CpuInfo, MetricUnavailable

_CPUINFO_PATH = Path("/proc/cpuinfo")


def _cpuinfo_model() -> str | None:
    try:
        text = _CPUINFO_PATH.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return None
    for line in text.splitlines():
        key, _, value = line.partition(":")
        if key.strip() in ("model name", "Hardware", "Processor") and value.strip():
            return value.strip()
    return None


def collect_cpu_usage() -> float:
    """Overall CPU utilisation since the previous call, in percent."""

    return float(psutil.cpu_percent(interval=None))


def collect_cpu_info() -> CpuInfo:
    model = _cpuinfo_model() or platform.processor()
    cores = psutil.cpu_count(logical=True)
    if not model and not cores:
        raise MetricUnavailable("CPU model and core count unavailable")
    return CpuInfo(model=model or "Unknown", cores=int(cores or 0))


def fallback_cpu_info() -> CpuInfo:
    """Default used on the event loop; must not spawn processes or read files."""

    return CpuInfo(model="Unknown", cores=os.cpu_count() or 0)


def collect_load_average() -> tuple[float, float, float]:
    try:
        one, five, fifteen = psutil.getloadavg()
    except (OSError, AttributeError) as exc:  # pragma: no cover - platform specific
        raise MetricUnavailable("load average unsupported on this platform") from exc
    return float(one), float(five), float(fifteen)
