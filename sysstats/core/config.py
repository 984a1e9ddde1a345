"""Global configuration values for the sysstats aggregator and web server."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class HistoryConfig:
    """Rolling window sizing for the timeline series."""

    capacity: int = 20  # samples per series


@dataclass(frozen=True)
class RateConfig:
    """Moving-average window of the network throughput estimator."""

    window: int = 5


@dataclass(frozen=True)
class CacheConfig:
    """TTLs (in seconds) for sources that are slow relative to how often they change."""

    file_system_ttl: float = 10.0
    disk_layout_ttl: float = 30.0
    battery_ttl: float = 10.0


@dataclass(frozen=True)
class ServerConfig:
    host: str = "127.0.0.1"
    port: int = 8088
    port_attempts: int = 10


@dataclass(frozen=True)
class SecurityConfig:
    """Security-related defaults for the web server."""

    allowed_origins: tuple[str, ...] = ("*",)
    allow_credentials: bool = False
    basic_auth_username: str | None = None
    basic_auth_password: str | None = None
    enable_rate_limit: bool = True
    rate_limit_requests: int = 120
    rate_limit_window_seconds: int = 60


APP_NAME = "sysstats"
HISTORY = HistoryConfig()
RATE = RateConfig()
CACHE = CacheConfig()
SERVER = ServerConfig()
SECURITY = SecurityConfig()
