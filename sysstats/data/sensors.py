"""Thermal and battery collectors."""

from __future__ import annotations

import math
from pathlib import Path

import psutil

from sysstats.models import BatteryStatus, MetricUnavailable

_SYS_POWER_SUPPLY = Path("/sys/class/power_supply")
_CPU_SENSORS = ("coretemp", "k10temp", "zenpower", "cpu_thermal", "cpu-thermal", "acpitz")


def _read_text(path: Path) -> str | None:
    try:
        value = path.read_text(encoding="utf-8", errors="replace").strip()
    except OSError:
        return None
    return value or None


def _read_float(path: Path, scale: float | None = None) -> float | None:
    text = _read_text(path)
    if text is None:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if scale:
        value /= scale
    return value


def collect_temperature() -> float:
    """Main CPU temperature in Celsius.

    Prefers well known CPU sensor chips and falls back to the first sensor
    with a reading. NaN readings count as unavailable.
    """

    try:
        sensors = psutil.sensors_temperatures(fahrenheit=False)
    except (AttributeError, NotImplementedError) as exc:  # pragma: no cover - platform specific
        raise MetricUnavailable("temperature sensors unsupported") from exc
    if not sensors:
        raise MetricUnavailable("no temperature sensors found")

    ordered = [sensors[name] for name in _CPU_SENSORS if name in sensors]
    ordered.extend(entries for name, entries in sensors.items() if name not in _CPU_SENSORS)
    for entries in ordered:
        for entry in entries:
            current = getattr(entry, "current", None)
            if current is None:
                continue
            value = float(current)
            if math.isnan(value):
                raise MetricUnavailable("temperature sensor reported NaN")
            return value
    raise MetricUnavailable("temperature sensors have no readings")


def _battery_supply() -> Path | None:
    if not _SYS_POWER_SUPPLY.exists():
        return None
    for entry in _SYS_POWER_SUPPLY.iterdir():
        entry_type = _read_text(entry / "type")
        if entry_type and entry_type.lower() == "battery":
            return entry
    return None


def collect_battery() -> BatteryStatus | None:
    """Battery state, or ``None`` when the host has no battery."""

    try:
        battery = psutil.sensors_battery()
    except (AttributeError, NotImplementedError):  # pragma: no cover - optional
        battery = None
    if battery is None:
        return None

    secs = battery.secsleft
    if secs in (psutil.POWER_TIME_UNKNOWN, psutil.POWER_TIME_UNLIMITED) or secs is None or secs < 0:
        time_left = 0.0
    else:
        time_left = float(secs)

    voltage = 0.0
    cycle_count = 0
    supply = _battery_supply()
    if supply is not None:
        voltage = _read_float(supply / "voltage_now", scale=1_000_000) or 0.0
        cycles = _read_float(supply / "cycle_count")
        cycle_count = int(cycles) if cycles else 0

    return BatteryStatus(
        level=float(battery.percent or 0.0),
        is_charging=bool(battery.power_plugged),
        time_left=time_left,
        voltage=voltage,
        cycle_count=cycle_count,
    )
