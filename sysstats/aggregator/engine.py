"""Aggregation pass: concurrent fetch, derived metrics and rolling histories."""

from __future__ import annotations

import asyncio
import logging
import platform
import time
from collections import defaultdict
from datetime import datetime, timezone
from typing import Any, Callable

from sysstats.core.config import CACHE, HISTORY, RATE, CacheConfig, HistoryConfig, RateConfig
from sysstats.core.formatting import format_percent
from sysstats.data import PsutilBackend, TelemetryBackend, fallback_cpu_info, host_identity, system_time
from sysstats.models import (
    CpuSample,
    Failed,
    InterfaceCounters,
    MemoryInfo,
    MemorySample,
    MetricResult,
    NetworkSample,
    NetworkSpeed,
    ProcessCounts,
    Snapshot,
    value_or_default,
)

from .adapter import MetricSourceAdapter
from .cache import TTLCache
from .history import HistoryBuffer
from .rate import RateEstimator

logger = logging.getLogger(__name__)


def _none() -> None:
    return None


# Value substituted for each source when its adapter reports Failed.
DEFAULTS: dict[str, Callable[[], Any]] = {
    "cpu_usage": lambda: 0.0,
    "cpu_info": fallback_cpu_info,
    "memory": lambda: MemoryInfo(total=0, used=0, available=0),
    "uptime": lambda: 0.0,
    "load_average": lambda: (0.0, 0.0, 0.0),
    "disk": _none,
    "network": list,
    "temperature": _none,
    "heap": _none,
    "process_count": ProcessCounts,
    "battery_status": _none,
    "file_system_info": list,
    "disk_layout": list,
}


class SnapshotAggregator:
    """Owns the cross-call state and produces one ``Snapshot`` per call.

    The history buffers, the rate estimator and the TTL cache live on the
    instance. Passes are serialised with an ``asyncio.Lock`` so concurrent
    ``get_snapshot`` calls on one event loop never interleave their updates.
    """

    def __init__(
        self,
        backend: TelemetryBackend | None = None,
        *,
        history: HistoryConfig = HISTORY,
        rate: RateConfig = RATE,
        cache: CacheConfig = CACHE,
        clock: Callable[[], float] = time.monotonic,
        wall_clock: Callable[[], datetime] | None = None,
        disk_path: str = "/",
    ) -> None:
        self._backend = backend or PsutilBackend()
        self._cache_config = cache
        self._wall_clock = wall_clock or (lambda: datetime.now(timezone.utc))
        self._lock = asyncio.Lock()

        self.cpu_history: HistoryBuffer[CpuSample] = HistoryBuffer(history.capacity)
        self.memory_history: HistoryBuffer[MemorySample] = HistoryBuffer(history.capacity)
        self.network_history: HistoryBuffer[NetworkSample] = HistoryBuffer(history.capacity)
        self.rates = RateEstimator(rate.window, clock=clock)
        self.cache = TTLCache(clock=clock)

        self._provider_failures: defaultdict[str, int] = defaultdict(int)
        self._diagnostics: dict[str, Any] = {
            "passes": 0,
            "last_pass_duration": 0.0,
            "last_pass_at": None,
            "last_error": None,
        }

        source = self._backend
        self._adapters: dict[str, MetricSourceAdapter[Any]] = {
            name: MetricSourceAdapter(name, fn, *args, on_failure=self._record_failure)
            for name, fn, args in (
                ("cpu_usage", source.cpu_usage, ()),
                ("cpu_info", source.cpu_info, ()),
                ("memory", source.memory_info, ()),
                ("uptime", source.uptime, ()),
                ("load_average", source.load_average, ()),
                ("disk", source.disk_usage, (disk_path,)),
                ("network", source.network_counters, ()),
                ("temperature", source.temperature, ()),
                ("heap", source.heap, ()),
                ("process_count", source.process_counts, ()),
                ("battery_status", source.battery, ()),
                ("file_system_info", source.file_systems, ()),
                ("disk_layout", source.disk_layout, ()),
            )
        }

    async def get_snapshot(self) -> Snapshot:
        async with self._lock:
            started = time.perf_counter()
            snapshot = await self._run_pass()
            self._diagnostics["passes"] += 1
            self._diagnostics["last_pass_duration"] = time.perf_counter() - started
            self._diagnostics["last_pass_at"] = snapshot.system_time.timestamp
            logger.debug("Pasada de agregación completada en %.3fs", self._diagnostics["last_pass_duration"])
            return snapshot

    async def _run_pass(self) -> Snapshot:
        ttl = self._cache_config
        (
            cpu_usage,
            cpu_info,
            memory,
            uptime,
            load_average,
            disk,
            network,
            temperature,
            heap,
            process_count,
            battery_status,
            file_system_info,
            disk_layout,
        ) = await asyncio.gather(
            self._direct("cpu_usage"),
            self._direct("cpu_info"),
            self._direct("memory"),
            self._direct("uptime"),
            self._direct("load_average"),
            self._direct("disk"),
            self._fetch("network"),
            self._direct("temperature"),
            self._direct("heap"),
            self._direct("process_count"),
            self._cached("battery_status", ttl.battery_ttl),
            self._cached("file_system_info", ttl.file_system_ttl),
            self._cached("disk_layout", ttl.disk_layout_ttl),
        )

        interfaces: list[InterfaceCounters] = value_or_default(network, DEFAULTS["network"])
        memory_percent = format_percent(memory.used, memory.total)
        network_speed = self._network_speed(network)

        now = self._wall_clock()
        timestamp = now.astimezone(timezone.utc).isoformat()
        self.cpu_history.append(CpuSample(timestamp=timestamp, usage=cpu_usage))
        self.memory_history.append(
            MemorySample(
                timestamp=timestamp,
                usage=float(memory_percent),
                used=memory.used,
                total=memory.total,
            )
        )
        network_sample = self._network_sample(timestamp, interfaces)
        if network_sample is not None:
            self.network_history.append(network_sample)

        platform_name, architecture, hostname = host_identity()
        return Snapshot(
            cpu_usage=cpu_usage,
            cpu_name=cpu_info.model,
            cpu_cores=cpu_info.cores,
            memory=memory,
            memory_percent=memory_percent,
            uptime=int(uptime),
            platform=platform_name,
            architecture=architecture,
            hostname=hostname,
            load_average=load_average,
            temperature=temperature,
            disk=disk,
            network=interfaces,
            cpu_history=self.cpu_history.snapshot_view(),
            memory_history=self.memory_history.snapshot_view(),
            network_history=self.network_history.snapshot_view(),
            heap=heap,
            process_count=process_count,
            file_system_info=file_system_info,
            network_speed=network_speed,
            battery_status=battery_status,
            system_time=system_time(now),
            disk_layout=disk_layout,
        )

    def _network_sample(self, timestamp: str, interfaces: list[InterfaceCounters]) -> NetworkSample | None:
        # no counters: repeat the last totals, or record nothing before the first reading
        if interfaces:
            total_rx = sum(iface.rx_bytes for iface in interfaces)
            total_tx = sum(iface.tx_bytes for iface in interfaces)
            return NetworkSample(timestamp=timestamp, input=total_rx, output=total_tx)
        previous = self.network_history.snapshot_view()
        if not previous:
            return None
        return NetworkSample(timestamp=timestamp, input=previous[-1].input, output=previous[-1].output)

    def _network_speed(self, network: MetricResult[list[InterfaceCounters]]) -> NetworkSpeed:
        # no interfaces or no counters: report idle without touching the estimator
        if isinstance(network, Failed) or not network.value:
            return NetworkSpeed()
        rx = sum(iface.rx_bytes for iface in network.value)
        tx = sum(iface.tx_bytes for iface in network.value)
        return self.rates.update(rx, tx)

    async def _fetch(self, name: str) -> MetricResult[Any]:
        return await self._adapters[name].fetch()

    async def _direct(self, name: str) -> Any:
        return value_or_default(await self._fetch(name), DEFAULTS[name])

    async def _cached(self, name: str, ttl: float) -> Any:
        return await self.cache.cached_call(name, lambda: self._direct(name), ttl)

    def _record_failure(self, name: str, failure: Failed) -> None:
        self._provider_failures[name] += 1
        self._diagnostics["last_error"] = {
            "provider": name,
            "message": failure.reason,
            "type": failure.error_type,
            "timestamp": time.time(),
        }

    def history(self) -> dict[str, list[dict[str, Any]]]:
        return {
            "cpu": [sample.to_dict() for sample in self.cpu_history],
            "memory": [sample.to_dict() for sample in self.memory_history],
            "network": [sample.to_dict() for sample in self.network_history],
        }

    def diagnostics(self) -> dict[str, Any]:
        return {
            **self._diagnostics,
            "provider_failures": dict(self._provider_failures),
            "platform": platform.platform(),
        }
