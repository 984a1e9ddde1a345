"""Uniform async wrapper around one blocking telemetry query."""

from __future__ import annotations

import asyncio
import logging
import math
from typing import Any, Callable, Generic, TypeVar

from sysstats.models import Failed, MetricResult, MetricUnavailable, Ok

T = TypeVar("T")
logger = logging.getLogger(__name__)

FailureHook = Callable[[str, Failed], None]


def _has_nan(value: Any) -> bool:
    if isinstance(value, float):
        return math.isnan(value)
    if isinstance(value, tuple):
        return any(isinstance(item, float) and math.isnan(item) for item in value)
    return False


class MetricSourceAdapter(Generic[T]):
    """Run ``fn`` off the event loop and turn any exception into ``Failed``.

    ``fetch`` never raises, and NaN readings count as unavailable. There are
    no retries: the next aggregation pass simply asks again.
    """

    def __init__(
        self,
        name: str,
        fn: Callable[..., T],
        *args: Any,
        on_failure: FailureHook | None = None,
    ) -> None:
        self.name = name
        self._fn = fn
        self._args = args
        self._on_failure = on_failure

    async def fetch(self) -> MetricResult[T]:
        try:
            value = await asyncio.to_thread(self._fn, *self._args)
            if _has_nan(value):
                raise MetricUnavailable("reading is NaN")
        except MetricUnavailable as exc:
            logger.info("Fuente '%s' sin datos: %s", self.name, exc)
            failure = Failed(reason=str(exc), error_type=type(exc).__name__)
        except Exception as exc:
            logger.warning(
                "Fuente '%s' falló durante la recolección: %s",
                self.name,
                exc,
                exc_info=logger.isEnabledFor(logging.DEBUG),
            )
            failure = Failed(reason=str(exc) or type(exc).__name__, error_type=type(exc).__name__)
        else:
            return Ok(value)

        if self._on_failure is not None:
            self._on_failure(self.name, failure)
        return failure

    def __repr__(self) -> str:
        return f"MetricSourceAdapter({self.name!r})"
