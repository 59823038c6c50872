from __future__ import annotations

from typing import assert_never

from ..schema import Platform
from .models import UnifiedGame

STEAM_STORE_URL = "https://store.steampowered.com/app/{id}"
XBOX_STORE_URL = "https://www.xbox.com/games/store/{id}"


def store_url(game: UnifiedGame, platform: Platform) -> str | None:
    """
    Store page for `game` on `platform`, or None when no link can be built from its ids.

    GOG, Epic and Amazon store pages are keyed by slugs their library ids don't carry.
    """
    native_id = game.app_id.get(platform.key)
    if not native_id:
        return None
    match platform:
        case Platform.STEAM:
            return STEAM_STORE_URL.format(id=native_id)
        case Platform.XBOX:
            return XBOX_STORE_URL.format(id=native_id)
        case Platform.GOG | Platform.EPIC | Platform.AMAZON:
            return None
        case _:
            assert_never(platform)


def total_playtime(game: UnifiedGame) -> int:
    return sum(int(v) for v in game.playtime.values())


def format_playtime(minutes: int) -> str:
    """
    Compact duration label: 45m, 2h 5m, 3h, 1d 2h, 4d.
    """
    minutes = max(0, int(minutes))
    if minutes < 60:
        return f"{minutes}m"

    hours, remaining_minutes = divmod(minutes, 60)
    if hours < 24:
        return f"{hours}h {remaining_minutes}m" if remaining_minutes > 0 else f"{hours}h"

    days, remaining_hours = divmod(hours, 24)
    if remaining_hours > 0:
        return f"{days}d {remaining_hours}h"
    return f"{days}d"
