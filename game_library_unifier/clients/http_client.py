from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any

import requests

from ..config import REQUEST, RETRY
from ..utils.utilities import (
    RateLimiter,
    network_failures_count,
    raise_on_new_network_failure,
    with_retries,
)


@dataclass
class HTTPJSONClient:
    """
    GET-JSON helper that standardizes retry + rate limiting + request counting.

    Platform clients create one per endpoint, passing their own `requests.Session` and
    `stats` dict so counters from all endpoints land in one place.
    """

    session: requests.Session
    stats: dict[str, Any] | None = None
    ratelimiter: RateLimiter | None = None
    timeout_s: float = REQUEST.timeout_s
    retries: int = RETRY.retries
    base_sleep_s: float = RETRY.base_sleep_s
    counter_key: str = "http_get"
    context_prefix: str = ""

    def _bump(self, key: str, by: int = 1) -> None:
        if self.stats is None:
            return
        self.stats[key] = int(self.stats.get(key, 0) or 0) + by

    def _ctx(self, context: str) -> str:
        if self.context_prefix:
            return f"{self.context_prefix}{': ' if context else ''}{context}"
        return context

    def get_json(
        self,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        status_handlers: dict[int, Any] | None = None,
        context: str = "",
        on_fail_return: Any = None,
    ) -> Any:
        """
        GET `url` and decode JSON.

        `status_handlers` maps status codes to a value returned as-is (e.g. {404: []}).
        Exhausted retries return `on_fail_return`, unless a network failure happened during
        this call, which raises.
        """
        before_net = network_failures_count(self.stats)

        def _request() -> Any:
            if self.ratelimiter is not None:
                self.ratelimiter.wait()
            self._bump(self.counter_key)
            kwargs: dict[str, Any] = {"timeout": self.timeout_s}
            if params is not None:
                kwargs["params"] = params
            if headers is not None:
                kwargs["headers"] = headers
            t0 = time.perf_counter()
            r = self.session.get(url, **kwargs)
            self._bump(f"{self.counter_key}_ms", int(round((time.perf_counter() - t0) * 1000.0)))
            if status_handlers is not None and r.status_code in status_handlers:
                return status_handlers[r.status_code]
            r.raise_for_status()
            return r.json()

        ctx = self._ctx(context)
        data = with_retries(
            _request,
            retries=self.retries,
            base_sleep_s=self.base_sleep_s,
            on_fail_return=on_fail_return,
            context=ctx,
            retry_stats=self.stats,
        )
        if data is on_fail_return:
            raise_on_new_network_failure(self.stats, before=before_net, context=ctx)
        return data

    @staticmethod
    def format_timing(stats: dict[str, Any] | None, *, key: str) -> str:
        if not stats:
            return f"{key}=0 {key}_ms=0"
        return f"{key}={int(stats.get(key, 0) or 0)} {key}_ms={int(stats.get(f'{key}_ms', 0) or 0)}"
