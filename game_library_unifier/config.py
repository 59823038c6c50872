from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RetryConfig:
    retries: int = 3
    base_sleep_s: float = 1.0
    jitter_s: float = 0.3
    http_429_default_retry_after_s: float = 5.0


@dataclass(frozen=True)
class RequestConfig:
    timeout_s: int = 10


@dataclass(frozen=True)
class CacheConfig:
    # Cached platform/unified libraries older than this are treated as missing.
    library_max_age_s: float = 24 * 60 * 60
    # Log cache writes that take longer than this threshold (milliseconds).
    slow_save_log_ms: int = 2000


@dataclass(frozen=True)
class SteamConfig:
    api_base_url: str = "https://api.steampowered.com"
    min_interval_s: float = 0.5
    include_played_free_games: bool = True


@dataclass(frozen=True)
class CLIConfig:
    # Upper bound; one worker per configured platform.
    max_parallel_platforms: int = 5


RETRY = RetryConfig()
REQUEST = RequestConfig()
CACHE = CacheConfig()
STEAM = SteamConfig()
CLI = CLIConfig()
