from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pandas as pd

from ..library.links import format_playtime, store_url, total_playtime
from ..library.models import UnifiedGame
from ..schema import (
    APP_ID_COLS,
    EXPORT_COLUMNS,
    PLATFORM_ORDER,
    PLAYTIME_COLS,
    STORE_URL_COLS,
)
from ..utils.utilities import write_csv, write_json


def _game_row(game: UnifiedGame) -> dict[str, Any]:
    row: dict[str, Any] = {
        "Id": game.id,
        "Name": game.name,
        "Platforms": ", ".join(game.platform_names()),
        "PlatformCount": len(game.platforms),
        "Genres": ", ".join(game.genres or []),
        "HeaderImage": game.images.get("header", ""),
        "IconImage": game.images.get("icon", ""),
    }
    for platform in PLATFORM_ORDER:
        row[APP_ID_COLS[platform]] = game.app_id.get(platform.key, "")
        minutes = game.playtime.get(platform.key)
        row[PLAYTIME_COLS[platform]] = "" if minutes is None else minutes
    for platform, col in STORE_URL_COLS.items():
        row[col] = store_url(game, platform) or ""

    total = total_playtime(game)
    row["TotalPlaytime"] = total if game.playtime else ""
    row["Playtime"] = format_playtime(total) if game.playtime else ""
    return row


def games_to_frame(games: list[UnifiedGame]) -> pd.DataFrame:
    """
    Flatten unified games into one row per game, keeping the merge order.

    Missing values are empty strings so CSV output never contains NaN tokens.
    """
    rows = [_game_row(g) for g in games]
    return pd.DataFrame(rows, columns=list(EXPORT_COLUMNS)).fillna("")


def write_unified_csv(games: list[UnifiedGame], path: str | Path) -> Path:
    out = Path(path)
    write_csv(games_to_frame(games), out)
    logging.info(f"✔ Unified library CSV written: {out} (rows={len(games)})")
    return out


def write_unified_json(games: list[UnifiedGame], path: str | Path) -> Path:
    out = Path(path)
    write_json([g.to_dict() for g in games], out)
    logging.info(f"✔ Unified library JSON written: {out} (rows={len(games)})")
    return out
