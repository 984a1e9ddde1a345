"""Timestamped samples kept by the history buffers and the rate estimator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class CpuSample:
    timestamp: str
    usage: float

    def to_dict(self) -> dict[str, Any]:
        return {"timestamp": self.timestamp, "usage": self.usage}


@dataclass(frozen=True, slots=True)
class MemorySample:
    timestamp: str
    usage: float
    used: int
    total: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "usage": self.usage,
            "used": self.used,
            "total": self.total,
        }


@dataclass(frozen=True, slots=True)
class NetworkSample:
    timestamp: str
    input: int
    output: int

    def to_dict(self) -> dict[str, Any]:
        return {"timestamp": self.timestamp, "input": self.input, "output": self.output}


@dataclass(frozen=True, slots=True)
class RateSample:
    download: float
    upload: float
    timestamp: float


@dataclass(frozen=True, slots=True)
class CacheEntry:
    value: Any
    stored_at: float
