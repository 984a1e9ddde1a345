"""Network throughput derived from successive absolute byte counters."""

from __future__ import annotations

import time
from collections import deque
from typing import Callable, Deque

from sysstats.core.config import RATE
from sysstats.models import NetworkSpeed, RateSample


class RateEstimator:
    """Smoothed download/upload rate in bytes per second.

    The first update only records the counters and reports zero. Later
    updates divide the counter delta by the measured elapsed time, clamp
    decreasing counters (interface resets) to zero and return the mean of
    the last ``window`` raw rates.
    """

    def __init__(self, window: int = RATE.window, clock: Callable[[], float] = time.monotonic) -> None:
        if window < 1:
            raise ValueError("window must be >= 1")
        self._clock = clock
        self._samples: Deque[RateSample] = deque(maxlen=window)
        self._last: tuple[int, int, float] | None = None

    @property
    def samples(self) -> list[RateSample]:
        return list(self._samples)

    @property
    def has_baseline(self) -> bool:
        return self._last is not None

    def update(self, current_rx: int, current_tx: int) -> NetworkSpeed:
        now = self._clock()
        previous = self._last
        self._last = (current_rx, current_tx, now)
        if previous is None:
            return NetworkSpeed()

        prev_rx, prev_tx, prev_time = previous
        elapsed = now - prev_time
        if elapsed <= 0:
            elapsed = 1.0
        download = max(0, current_rx - prev_rx) / elapsed
        upload = max(0, current_tx - prev_tx) / elapsed
        self._samples.append(RateSample(download=download, upload=upload, timestamp=now))

        count = len(self._samples)
        return NetworkSpeed(
            download=sum(sample.download for sample in self._samples) / count,
            upload=sum(sample.upload for sample in self._samples) / count,
        )
