"""Tagged results returned by metric source adapters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

T = TypeVar("T")


class MetricUnavailable(Exception):
    """Raised by a collector when a reading is missing or malformed."""


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Failed:
    reason: str
    error_type: str = "Exception"

    @property
    def ok(self) -> bool:
        return False


MetricResult = Union[Ok[T], Failed]


def value_or_default(result: MetricResult[T], default: T | Callable[[], T]) -> T:
    """Unwrap ``result`` or substitute the documented default for a failed source.

    ``default`` may be a zero-argument factory so mutable defaults (lists,
    records) are never shared between snapshots.
    """

    if isinstance(result, Ok):
        return result.value
    if callable(default):
        return default()
    return default
