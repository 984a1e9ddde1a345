"""Dedicated event-loop thread that executes aggregation passes for sync callers."""

from __future__ import annotations

import asyncio
import threading
from typing import Any

from sysstats.aggregator import SnapshotAggregator


class AggregatorRunner:
    """Run ``SnapshotAggregator`` coroutines on one long-lived loop.

    HTTP handler threads submit passes here so every pass shares the same
    loop and the aggregator's lock.
    """

    def __init__(self, aggregator: SnapshotAggregator) -> None:
        self.aggregator = aggregator
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None
        self._ready = threading.Event()

    def start(self) -> None:
        if self._thread and self._thread.is_alive():
            return
        self._ready.clear()
        self._thread = threading.Thread(target=self._run, name="AggregatorLoop", daemon=True)
        self._thread.start()
        self._ready.wait()

    def _run(self) -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        self._loop = loop
        self._ready.set()
        try:
            loop.run_forever()
        finally:
            loop.close()

    def snapshot(self, timeout: float | None = 30.0) -> dict[str, Any]:
        if self._loop is None:
            raise RuntimeError("AggregatorRunner.start() must be called first")
        future = asyncio.run_coroutine_threadsafe(self.aggregator.get_snapshot(), self._loop)
        return future.result(timeout=timeout).to_dict()

    def stop(self, timeout: float | None = None) -> None:
        loop = self._loop
        thread = self._thread
        if loop is not None:
            loop.call_soon_threadsafe(loop.stop)
        if thread and thread.is_alive():
            thread.join(timeout=timeout)
        self._loop = None
        self._thread = None
