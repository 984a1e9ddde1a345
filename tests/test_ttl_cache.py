import asyncio

import pytest

from sysstats.aggregator import TTLCache


class CountingProducer:
    def __init__(self, values=None) -> None:
        self.calls = 0
        self._values = values

    async def __call__(self):
        self.calls += 1
        if self._values is not None:
            return self._values[self.calls - 1]
        return f"value-{self.calls}"


def test_fresh_entry_is_served_without_calling_producer(clock) -> None:
    cache = TTLCache(clock=clock)
    producer = CountingProducer()

    first = asyncio.run(cache.cached_call("fs", producer, ttl=10))
    clock.advance(9.999)
    second = asyncio.run(cache.cached_call("fs", producer, ttl=10))

    assert first == second == "value-1"
    assert producer.calls == 1


def test_expired_entry_is_recomputed(clock) -> None:
    cache = TTLCache(clock=clock)
    producer = CountingProducer()

    asyncio.run(cache.cached_call("fs", producer, ttl=10))
    clock.advance(10.001)
    value = asyncio.run(cache.cached_call("fs", producer, ttl=10))

    assert value == "value-2"
    assert producer.calls == 2


def test_entry_at_exact_ttl_is_stale(clock) -> None:
    cache = TTLCache(clock=clock)
    producer = CountingProducer()

    asyncio.run(cache.cached_call("fs", producer, ttl=10))
    clock.advance(10)
    asyncio.run(cache.cached_call("fs", producer, ttl=10))

    assert producer.calls == 2


def test_degraded_values_are_cached_too(clock) -> None:
    cache = TTLCache(clock=clock)
    producer = CountingProducer(values=[None, "late"])

    assert asyncio.run(cache.cached_call("battery", producer, ttl=10)) is None
    assert asyncio.run(cache.cached_call("battery", producer, ttl=10)) is None
    assert producer.calls == 1
    assert "battery" in cache


def test_producer_errors_propagate_and_keep_previous_entry(clock) -> None:
    cache = TTLCache(clock=clock)
    asyncio.run(cache.cached_call("layout", CountingProducer(), ttl=1))
    clock.advance(2)

    async def broken():
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        asyncio.run(cache.cached_call("layout", broken, ttl=1))
    assert cache.peek("layout") == "value-1"


def test_keys_are_independent(clock) -> None:
    cache = TTLCache(clock=clock)
    a, b = CountingProducer(), CountingProducer()

    asyncio.run(cache.cached_call("a", a, ttl=10))
    asyncio.run(cache.cached_call("b", b, ttl=10))
    cache.invalidate("a")
    asyncio.run(cache.cached_call("a", a, ttl=10))
    asyncio.run(cache.cached_call("b", b, ttl=10))

    assert (a.calls, b.calls) == (2, 1)
    assert len(cache) == 2
