"""
Utility functions and helpers.

This module intentionally uses lazy attribute loading to avoid importing heavier
submodules (e.g., pandas) unless they are needed.
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "RateLimiter",
    "RunPaths",
    "load_credentials",
    "load_json_cache",
    "parse_sources",
    "save_json_cache",
    "with_retries",
    "write_csv",
    "write_json",
]


def __getattr__(name: str) -> Any:  # pragma: no cover
    if name in {
        "RateLimiter",
        "RunPaths",
        "load_credentials",
        "load_json_cache",
        "save_json_cache",
        "with_retries",
        "write_csv",
        "write_json",
    }:
        from . import utilities as _u

        return getattr(_u, name)

    if name == "parse_sources":
        from .source_selection import parse_sources

        return parse_sources

    raise AttributeError(name)
