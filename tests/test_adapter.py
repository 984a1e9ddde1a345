import asyncio
import logging
import threading

from sysstats.aggregator import MetricSourceAdapter
from sysstats.models import Failed, MetricUnavailable, Ok


def test_success_is_wrapped_in_ok() -> None:
    adapter = MetricSourceAdapter("disk", lambda path: f"usage:{path}", "/")
    assert asyncio.run(adapter.fetch()) == Ok("usage:/")


def test_exceptions_become_failed_and_hook_is_notified(caplog) -> None:
    seen = []

    def broken():
        raise PermissionError("denied")

    adapter = MetricSourceAdapter("battery", broken, on_failure=lambda name, f: seen.append((name, f)))

    with caplog.at_level(logging.WARNING, logger="sysstats.aggregator.adapter"):
        result = asyncio.run(adapter.fetch())

    assert isinstance(result, Failed)
    assert not result.ok
    assert result.error_type == "PermissionError"
    assert result.reason == "denied"
    assert seen == [("battery", result)]
    assert "battery" in caplog.text


def test_unavailable_reading_is_failed() -> None:
    def nan_sensor():
        raise MetricUnavailable("temperature sensor reported NaN")

    result = asyncio.run(MetricSourceAdapter("temperature", nan_sensor).fetch())

    assert result == Failed(reason="temperature sensor reported NaN", error_type="MetricUnavailable")


def test_query_runs_off_the_event_loop_thread() -> None:
    threads = []
    adapter = MetricSourceAdapter("cpu", lambda: threads.append(threading.get_ident()))

    async def run():
        await adapter.fetch()
        return threading.get_ident()

    loop_thread = asyncio.run(run())
    assert threads and threads[0] != loop_thread


def test_nan_results_are_unavailable() -> None:
    scalar = asyncio.run(MetricSourceAdapter("temperature", lambda: float("nan")).fetch())
    triple = asyncio.run(MetricSourceAdapter("load_average", lambda: (0.5, float("nan"), 0.1)).fetch())

    assert isinstance(scalar, Failed) and scalar.error_type == "MetricUnavailable"
    assert isinstance(triple, Failed) and triple.error_type == "MetricUnavailable"
    assert asyncio.run(MetricSourceAdapter("load_average", lambda: (0.5, 0.25, 0.1)).fetch()) == Ok((0.5, 0.25, 0.1))
