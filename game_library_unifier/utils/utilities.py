from __future__ import annotations

import json
import logging
import random
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

import pandas as pd
import yaml

from ..config import CACHE, RETRY

# ----------------------------
# Paths / Folder structure
# ----------------------------


@dataclass(frozen=True)
class RunPaths:
    run_dir: Path
    input_dir: Path
    output_dir: Path
    cache_dir: Path
    logs_dir: Path

    @staticmethod
    def from_run_dir(run_dir: str | Path) -> RunPaths:
        root = Path(run_dir).resolve()
        return RunPaths(
            run_dir=root,
            input_dir=root / "input",
            output_dir=root / "output",
            cache_dir=root / "cache",
            logs_dir=root / "logs",
        )

    def ensure(self) -> None:
        self.input_dir.mkdir(parents=True, exist_ok=True)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.logs_dir.mkdir(parents=True, exist_ok=True)


# ----------------------------
# CSV Helpers
# ----------------------------


def write_csv(df: pd.DataFrame, path: str | Path) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)


# ----------------------------
# JSON files
# ----------------------------


def load_json_cache(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    if not p.exists():
        return {}
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        logging.warning(f"[CACHE] Ignoring unreadable cache file: {p}")
        return {}
    return data if isinstance(data, dict) else {}


def save_json_cache(cache: dict[str, Any], path: str | Path) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    t0 = time.perf_counter()
    p.write_text(json.dumps(cache, ensure_ascii=False, indent=2), encoding="utf-8")
    dur_ms = int(round((time.perf_counter() - t0) * 1000.0))
    slow_ms = int(getattr(CACHE, "slow_save_log_ms", 0) or 0)
    if slow_ms > 0 and dur_ms >= slow_ms:
        logging.info(f"[CACHE] Wrote '{p.name}' in {dur_ms}ms")


def write_json(data: Any, path: str | Path) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")


# ----------------------------
# Rate limiting + retries
# ----------------------------


class RateLimiter:
    """
    Simple rate limiter: enforces minimum interval between requests.
    """

    def __init__(self, min_interval_s: float = 1.0):
        self.min_interval_s = float(min_interval_s)
        self._last = 0.0

    def wait(self) -> None:
        # Use monotonic time to avoid issues if the system clock changes.
        now = time.monotonic()
        delta = now - self._last
        if delta < self.min_interval_s:
            time.sleep(self.min_interval_s - delta)
        self._last = time.monotonic()


def _bump(stats: dict[str, Any] | None, key: str, by: int = 1) -> None:
    if stats is None:
        return
    stats[key] = int(stats.get(key, 0) or 0) + by


def with_retries(
    fn: Callable[[], Any],
    *,
    retries: int = RETRY.retries,
    base_sleep_s: float = RETRY.base_sleep_s,
    jitter_s: float = RETRY.jitter_s,
    retry_on: tuple[type, ...] = (Exception,),
    on_fail_return: Any = None,
    context: str | None = None,
    retry_stats: dict[str, Any] | None = None,
) -> Any:
    """
    Execute fn with retries and exponential backoff.

    HTTP 429 responses honor `Retry-After`. After the last attempt the failure is logged and
    `on_fail_return` is returned instead of raising.
    """
    import requests

    net_types = (
        requests.exceptions.ConnectionError,
        requests.exceptions.Timeout,
        requests.exceptions.SSLError,
    )

    for attempt in range(retries):
        try:
            return fn()
        except retry_on as e:
            retry_after_s: float | None = None
            is_429 = False
            is_http = isinstance(e, requests.exceptions.HTTPError)
            is_network = isinstance(e, net_types)
            if is_http:
                resp = getattr(e, "response", None)
                if getattr(resp, "status_code", None) == 429:
                    is_429 = True
                    headers = getattr(resp, "headers", {}) or {}
                    try:
                        ra = str(headers.get("Retry-After", "") or "").strip()
                        retry_after_s = float(ra) if ra else None
                    except ValueError:
                        retry_after_s = None
                    if retry_after_s is None:
                        retry_after_s = RETRY.http_429_default_retry_after_s

            if is_429:
                _bump(retry_stats, "http_429")
            if is_network:
                _bump(retry_stats, "network_errors")
            if is_http:
                _bump(retry_stats, "http_errors")

            if attempt == retries - 1:
                if context:
                    if is_network:
                        tag = "NETWORK"
                    elif is_http:
                        tag = "HTTP"
                    else:
                        tag = "REQUEST"
                    logging.error(f"[{tag}] {context}: {type(e).__name__}: {e}")
                if is_network:
                    _bump(retry_stats, "network_failures")
                if is_http:
                    _bump(retry_stats, "http_failures")
                return on_fail_return

            sleep = base_sleep_s * (2**attempt) + random.uniform(0, jitter_s)
            if retry_after_s is not None and retry_after_s > 0:
                sleep = max(sleep, retry_after_s)
            _bump(retry_stats, "retry_attempts")
            time.sleep(sleep)
    return on_fail_return


def network_failures_count(stats: dict[str, Any] | None) -> int:
    if not stats:
        return 0
    try:
        return int(stats.get("network_failures", 0) or 0)
    except (TypeError, ValueError):
        return 0


def raise_on_new_network_failure(
    stats: dict[str, Any] | None, *, before: int, context: str
) -> None:
    """
    Raise a clear error when a network failure happened during a platform request.

    An offline run should not look like an empty library.
    """
    after = network_failures_count(stats)
    if after > before:
        raise RuntimeError(
            f"Network unavailable while calling {context}. Enable internet access and rerun."
        )


# ----------------------------
# Credentials loading
# ----------------------------


def load_credentials(credentials_path: str | Path | None = None) -> dict[str, Any]:
    """
    Load credentials from a YAML file.

    Args:
        credentials_path: Path to credentials.yaml file. If None, looks for
                         data/credentials.yaml in the project root.

    Returns:
        Dictionary with credentials (e.g., {'steam': {'api_key': ..., 'steam_id': ...}})
    """
    if credentials_path is None:
        root = Path(__file__).resolve().parent.parent.parent
        credentials_path = root / "data" / "credentials.yaml"
    else:
        credentials_path = Path(credentials_path)

    if not credentials_path.exists():
        raise FileNotFoundError(
            f"Credentials file not found: {credentials_path}\n"
            "Please create data/credentials.yaml with your Steam Web API key."
        )

    with open(credentials_path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}
