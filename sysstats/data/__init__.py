"""Data provider package."""

from .backend import PsutilBackend, TelemetryBackend
from .cpu import collect_cpu_info, collect_cpu_usage, collect_load_average, fallback_cpu_info
from .disk import collect_disk_layout, collect_disk_usage, collect_file_systems
from .memory import collect_memory_info
from .network import collect_network_counters
from .processes import collect_process_counts
from .sensors import collect_battery, collect_temperature
from .system import collect_heap_stats, collect_uptime, host_identity, system_time

__all__ = [
    "PsutilBackend",
    "TelemetryBackend",
    "collect_battery",
    "collect_cpu_info",
    "collect_cpu_usage",
    "collect_disk_layout",
    "collect_disk_usage",
    "collect_file_systems",
    "collect_heap_stats",
    "collect_load_average",
    "collect_memory_info",
    "collect_network_counters",
    "collect_process_counts",
    "collect_temperature",
    "collect_uptime",
    "fallback_cpu_info",
    "host_identity",
    "system_time",
]
