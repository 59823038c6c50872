from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from ..schema import PLATFORM_ORDER, Platform
from .extract import PlatformFields, extract_platform_fields
from .models import PlatformEntry, UnifiedGame
from .titles import (
    UNKNOWN_TITLE,
    clean_display_title,
    extract_title,
    locale_sort_key,
    normalize_title,
)

RawGames = Iterable[Mapping[str, Any]]


def _new_game(
    platform: Platform, fields: PlatformFields, *, display_name: str, index: int
) -> UnifiedGame:
    native_id = fields.native_id or f"unknown-{index}"
    game = UnifiedGame(
        id=f"{platform.key}-{native_id}",
        name=display_name,
        platforms=[PlatformEntry(name=platform, playtime=fields.entry_playtime)],
    )
    if fields.native_id:
        game.app_id[platform.key] = fields.native_id
    if fields.playtime is not None:
        game.playtime[platform.key] = fields.playtime
    if fields.images:
        game.images = dict(fields.images)
    if fields.genres is not None:
        game.genres = list(fields.genres)
    return game


def _merge_into(game: UnifiedGame, platform: Platform, fields: PlatformFields) -> None:
    game.platforms.append(PlatformEntry(name=platform, playtime=fields.entry_playtime))
    if fields.native_id:
        game.app_id = {**game.app_id, platform.key: fields.native_id}
    if fields.playtime is not None:
        game.playtime = {**game.playtime, platform.key: fields.playtime}
    header = fields.images.get("header")
    if header and not game.images.get("header"):
        game.images = {**game.images, "header": header}


def merge_games(
    steam_games: RawGames | None = (),
    xbox_games: RawGames | None = (),
    gog_games: RawGames | None = (),
    epic_games: RawGames | None = (),
    amazon_games: RawGames | None = (),
) -> list[UnifiedGame]:
    """
    Merge raw per-platform game lists into one deduplicated library.

    Records are the same game iff their normalized titles are equal. Platforms are processed
    in a fixed order (Steam, Xbox, GOG, Epic, Amazon), so the first platform to mention a
    title owns its display name and `id`. The result is sorted by display name.

    Records without any title all fall back to "Unknown Game" and therefore collapse into a
    single shared entry.

    Pure: inputs are not mutated and nothing is cached between calls.
    """
    by_platform: dict[Platform, RawGames | None] = {
        Platform.STEAM: steam_games,
        Platform.XBOX: xbox_games,
        Platform.GOG: gog_games,
        Platform.EPIC: epic_games,
        Platform.AMAZON: amazon_games,
    }

    by_key: dict[str, UnifiedGame] = {}
    untitled = 0
    for platform in PLATFORM_ORDER:
        for index, record in enumerate(by_platform[platform] or ()):
            if not isinstance(record, Mapping):
                continue
            title = extract_title(record)
            if title == UNKNOWN_TITLE:
                untitled += 1
            key = normalize_title(title)
            fields = extract_platform_fields(platform, record)

            existing = by_key.get(key)
            if existing is not None:
                _merge_into(existing, platform, fields)
            else:
                by_key[key] = _new_game(
                    platform, fields, display_name=clean_display_title(title), index=index
                )

    if untitled > 1:
        logging.debug(f"[MERGE] {untitled} untitled records collapsed into '{UNKNOWN_TITLE}'")

    return sorted(by_key.values(), key=lambda g: locale_sort_key(g.name))
