"""Fixed-capacity timeline series."""

from __future__ import annotations

from collections import deque
from typing import Deque, Generic, Iterator, TypeVar

from sysstats.core.config import HISTORY

S = TypeVar("S")


class HistoryBuffer(Generic[S]):
    """Insertion-ordered FIFO of samples; the oldest sample is evicted at capacity."""

    def __init__(self, capacity: int = HISTORY.capacity) -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self._samples: Deque[S] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._samples.maxlen or 0

    def append(self, sample: S) -> None:
        self._samples.append(sample)

    def snapshot_view(self) -> list[S]:
        """Copy of the series, oldest first."""

        return list(self._samples)

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[S]:
        return iter(self.snapshot_view())
