"""Strict time-to-live memoisation for slow sources."""

from __future__ import annotations

import time
from typing import Any, Awaitable, Callable, TypeVar

from sysstats.models import CacheEntry

T = TypeVar("T")


class TTLCache:
    """Keyed cache whose entries expire ``ttl`` seconds after they were stored.

    Expired entries are never served: the producer is awaited and its result
    replaces the old entry. Concurrent misses on the same key each invoke the
    producer; the aggregator serialises its passes so this does not happen
    in practice.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    async def cached_call(self, key: str, producer: Callable[[], Awaitable[T]], ttl: float) -> T:
        entry = self._entries.get(key)
        if entry is not None and self._clock() - entry.stored_at < ttl:
            return entry.value
        # producer errors propagate and leave the previous entry untouched
        value = await producer()
        self._entries[key] = CacheEntry(value=value, stored_at=self._clock())
        return value

    def peek(self, key: str) -> Any:
        entry = self._entries.get(key)
        return entry.value if entry is not None else None

    def invalidate(self, key: str | None = None) -> None:
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
