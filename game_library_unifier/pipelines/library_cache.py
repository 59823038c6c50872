from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..config import CACHE
from ..library.models import UnifiedGame
from ..schema import Platform
from ..utils.parse import get_list_of_dicts
from ..utils.utilities import load_json_cache, save_json_cache

UNIFIED_KEY = "unified"


def age_string(timestamp: float, *, now: float | None = None) -> str:
    age_minutes = int(((now if now is not None else time.time()) - timestamp) // 60)
    if age_minutes < 60:
        return f"{age_minutes}m ago"
    age_hours = age_minutes // 60
    if age_hours < 24:
        return f"{age_hours}h ago"
    return f"{age_hours // 24}d ago"


@dataclass(frozen=True)
class CacheEntryStatus:
    count: int
    age: str
    expired: bool


class LibraryCache:
    """
    JSON file cache of fetched platform libraries and the last unified result.

    Layout:
        {"steam": {"games": [...raw...], "timestamp": ..., "platform": "Steam"},
         ...,
         "unified": {"games": [...UnifiedGame.to_dict()...], "timestamp": ...}}

    Entries older than `max_age_s` read as missing but stay on disk until overwritten.
    """

    def __init__(self, path: str | Path, *, max_age_s: float = CACHE.library_max_age_s):
        self.path = Path(path)
        self.max_age_s = float(max_age_s)

    def _read(self) -> dict[str, Any]:
        return load_json_cache(self.path)

    def _write(self, cache: dict[str, Any]) -> None:
        save_json_cache(cache, self.path)

    def _is_expired(self, timestamp: float) -> bool:
        return (time.time() - float(timestamp)) > self.max_age_s

    def _fresh_entry(self, cache: dict[str, Any], key: str, label: str) -> dict[str, Any] | None:
        entry = cache.get(key)
        if not isinstance(entry, dict) or "timestamp" not in entry:
            logging.debug(f"[CACHE] No cached games for {label}")
            return None
        try:
            ts = float(entry["timestamp"])
        except (TypeError, ValueError):
            return None
        if self._is_expired(ts):
            logging.info(f"[CACHE] Cache expired for {label} ({age_string(ts)})")
            return None
        return entry

    def save_platform_games(self, platform: Platform, games: list[dict[str, Any]]) -> None:
        cache = self._read()
        cache[platform.key] = {
            "games": list(games),
            "timestamp": time.time(),
            "platform": platform.value,
        }
        self._write(cache)
        logging.info(f"[CACHE] Cached {len(games)} games for {platform.value}")

    def get_platform_games(self, platform: Platform) -> list[dict[str, Any]] | None:
        entry = self._fresh_entry(self._read(), platform.key, platform.value)
        if entry is None:
            return None
        games = get_list_of_dicts(entry.get("games"))
        logging.info(
            f"[CACHE] Loaded {len(games)} cached games for {platform.value} "
            f"({age_string(float(entry['timestamp']))})"
        )
        return games

    def save_unified_games(self, games: list[UnifiedGame]) -> None:
        cache = self._read()
        cache[UNIFIED_KEY] = {
            "games": [g.to_dict() for g in games],
            "timestamp": time.time(),
        }
        self._write(cache)
        logging.info(f"[CACHE] Cached {len(games)} unified games")

    def get_unified_games(self) -> list[UnifiedGame] | None:
        entry = self._fresh_entry(self._read(), UNIFIED_KEY, "unified library")
        if entry is None:
            return None
        return [UnifiedGame.from_dict(g) for g in get_list_of_dicts(entry.get("games"))]

    def has_cached_data(self) -> bool:
        return bool(self._read())

    def status(self) -> dict[str, CacheEntryStatus]:
        out: dict[str, CacheEntryStatus] = {}
        for key, entry in self._read().items():
            if not isinstance(entry, dict) or "timestamp" not in entry or "games" not in entry:
                continue
            games = entry.get("games")
            try:
                ts = float(entry["timestamp"])
            except (TypeError, ValueError):
                continue
            out[key] = CacheEntryStatus(
                count=len(games) if isinstance(games, list) else 0,
                age=age_string(ts),
                expired=self._is_expired(ts),
            )
        return out

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
        logging.info("[CACHE] Game cache cleared")

    def clear_platform(self, platform: Platform) -> None:
        cache = self._read()
        if cache.pop(platform.key, None) is not None:
            self._write(cache)
        logging.info(f"[CACHE] Cleared cache for {platform.value}")
