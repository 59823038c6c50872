from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from ..schema import Platform
from ..utils.parse import get_list_of_dicts

# Wrapper keys used by the platform CLIs / APIs around the actual list of titles.
_LIST_KEYS = ("games", "titles", "items", "library")


def _unwrap(data: Any) -> list[Any] | None:
    if isinstance(data, list):
        return data
    if not isinstance(data, dict):
        return None
    for k in _LIST_KEYS:
        v = data.get(k)
        if isinstance(v, list):
            return v
    # Steam Web API shape: {"response": {"games": [...]}}
    response = data.get("response")
    if isinstance(response, dict) and isinstance(response.get("games"), list):
        return response["games"]
    return None


def load_platform_export(path: str | Path, platform: Platform) -> list[dict[str, Any]]:
    """
    Load raw per-title records for `platform` from a JSON export.

    Accepts a bare JSON array or an object wrapping it (`games`, `titles`, `items`,
    `library`, or Steam's `response.games`). Entries that are not objects are dropped.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"{platform.value} export not found: {p}")
    try:
        data = json.loads(p.read_text(encoding="utf-8") or "null")
    except json.JSONDecodeError as e:
        raise ValueError(f"{platform.value} export is not valid JSON: {p} ({e})") from e

    items = _unwrap(data)
    if items is None:
        raise ValueError(f"{platform.value} export has no list of games: {p}")

    games = get_list_of_dicts(items)
    dropped = len(items) - len(games)
    if dropped:
        logging.warning(f"[{platform.key.upper()}] Skipped {dropped} non-object entries in {p.name}")
    logging.info(f"[{platform.key.upper()}] Loaded {len(games)} games from {p.name}")
    return games
