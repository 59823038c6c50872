from __future__ import annotations

from enum import Enum

# -----------------------------------------------------------------------------
# Platforms
# -----------------------------------------------------------------------------


class Platform(Enum):
    """
    Closed set of game-distribution platforms the unifier knows about.

    The value is the display name carried on merged records; `key` is the short lowercase
    identifier used for `UnifiedGame.id` prefixes and for the `appId` / `playtime` maps.
    """

    STEAM = "Steam"
    XBOX = "Xbox"
    GOG = "GOG"
    EPIC = "Epic Games"
    AMAZON = "Amazon Games"

    @property
    def key(self) -> str:
        return _PLATFORM_KEYS[self]

    @classmethod
    def from_key(cls, key: str) -> Platform:
        k = str(key or "").strip().lower()
        for p, pk in _PLATFORM_KEYS.items():
            if pk == k:
                return p
        raise ValueError(f"Unknown platform key: {key!r}")


_PLATFORM_KEYS: dict[Platform, str] = {
    Platform.STEAM: "steam",
    Platform.XBOX: "xbox",
    Platform.GOG: "gog",
    Platform.EPIC: "epic",
    Platform.AMAZON: "amazon",
}

# Merge processing order. Earlier platforms win the display name and the `id` prefix.
PLATFORM_ORDER: tuple[Platform, ...] = (
    Platform.STEAM,
    Platform.XBOX,
    Platform.GOG,
    Platform.EPIC,
    Platform.AMAZON,
)

# -----------------------------------------------------------------------------
# CLI source selection
# -----------------------------------------------------------------------------

ALLOWED_SOURCES = {p.key for p in PLATFORM_ORDER}
SOURCE_ALIASES: dict[str, list[str]] = {
    "pc": ["steam", "gog", "epic", "amazon"],
    "launchers": ["gog", "epic", "amazon"],
}

# -----------------------------------------------------------------------------
# Export columns
# -----------------------------------------------------------------------------

# Native identifier column per platform in CSV exports.
APP_ID_COLS: dict[Platform, str] = {
    Platform.STEAM: "Steam_AppID",
    Platform.XBOX: "Xbox_TitleID",
    Platform.GOG: "GOG_ID",
    Platform.EPIC: "Epic_CatalogItemID",
    Platform.AMAZON: "Amazon_ID",
}

PLAYTIME_COLS: dict[Platform, str] = {
    Platform.STEAM: "Playtime_Steam",
    Platform.XBOX: "Playtime_Xbox",
    Platform.GOG: "Playtime_GOG",
    Platform.EPIC: "Playtime_Epic",
    Platform.AMAZON: "Playtime_Amazon",
}

STORE_URL_COLS: dict[Platform, str] = {
    Platform.STEAM: "StoreURL_Steam",
    Platform.XBOX: "StoreURL_Xbox",
}

EXPORT_COLUMNS: tuple[str, ...] = (
    "Id",
    "Name",
    "Platforms",
    "PlatformCount",
    *APP_ID_COLS.values(),
    *PLAYTIME_COLS.values(),
    "TotalPlaytime",
    "Playtime",
    "Genres",
    "HeaderImage",
    "IconImage",
    *STORE_URL_COLS.values(),
)
