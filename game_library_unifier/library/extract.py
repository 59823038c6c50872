from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, assert_never

from ..schema import Platform
from ..utils.parse import as_minutes, as_str, first_present, get_list_of_dicts

STEAM_ICON_URL = (
    "https://media.steampowered.com/steamcommunity/public/images/apps/{appid}/{icon}.jpg"
)

XBOX_HEADER_IMAGE_TYPES = ("BoxArt", "Hero")
XBOX_ICON_IMAGE_TYPES = ("Icon",)
EPIC_HEADER_IMAGE_TYPES = ("DieselGameBox", "DieselGameBoxTall")


@dataclass
class PlatformFields:
    """
    Platform-specific fields pulled out of one raw record.

    `playtime` is None unless the platform supplied a value worth merging; Steam always
    supplies one (defaulting to 0). `reported_playtime` is what the platform entry carries
    when it differs from the merged value (Amazon reports 0 for unplayed titles).
    """

    native_id: str | None = None
    playtime: int | None = None
    genres: list[str] | None = None
    images: dict[str, str] = field(default_factory=dict)
    reported_playtime: int | None = None

    @property
    def entry_playtime(self) -> int | None:
        if self.reported_playtime is not None:
            return self.reported_playtime
        return self.playtime


def _id_str(value: object) -> str | None:
    s = as_str(value)
    return s or None


def _genres(value: object) -> list[str] | None:
    if not isinstance(value, list):
        return None
    return [s for s in (as_str(v) for v in value) if s]


def _truthy_minutes(value: object) -> int | None:
    minutes = as_minutes(value)
    return minutes if minutes else None


def _typed_image_url(images: object, types: tuple[str, ...]) -> str:
    for it in get_list_of_dicts(images):
        if as_str(it.get("type")) in types:
            url = as_str(it.get("url"))
            if url:
                return url
    return ""


def _mapped_images(record: Mapping[str, Any]) -> dict[str, str]:
    raw = record.get("images")
    if not isinstance(raw, Mapping):
        return {}
    out: dict[str, str] = {}
    for k in ("header", "icon"):
        v = as_str(raw.get(k))
        if v:
            out[k] = v
    return out


def _steam(record: Mapping[str, Any]) -> PlatformFields:
    appid = _id_str(record.get("appid"))
    images = _mapped_images(record)
    icon = as_str(record.get("img_icon_url"))
    if icon and appid:
        images["icon"] = STEAM_ICON_URL.format(appid=appid, icon=icon)
    return PlatformFields(
        native_id=_id_str(first_present(record, "appid", "id")),
        playtime=as_minutes(record.get("playtime_forever")) or 0,
        genres=_genres(record.get("genres")),
        images=images,
    )


def _xbox(record: Mapping[str, Any]) -> PlatformFields:
    images = _mapped_images(record)
    header = _typed_image_url(record.get("images"), XBOX_HEADER_IMAGE_TYPES)
    icon = _typed_image_url(record.get("images"), XBOX_ICON_IMAGE_TYPES)
    if header:
        images.setdefault("header", header)
    if icon:
        images.setdefault("icon", icon)
    return PlatformFields(
        native_id=_id_str(first_present(record, "titleId", "id")),
        # Title history only carries last-played timestamps; no minutes are derived from them.
        playtime=_truthy_minutes(record.get("playtime")),
        genres=_genres(record.get("genres")),
        images=images,
    )


def _gog(record: Mapping[str, Any]) -> PlatformFields:
    images = _mapped_images(record)
    image = as_str(record.get("image"))
    if image:
        images.setdefault("header", image)
        images.setdefault("icon", image)
    return PlatformFields(
        native_id=_id_str(record.get("id")),
        playtime=_truthy_minutes(record.get("playtime")),
        genres=_genres(record.get("genres")),
        images=images,
    )


def _epic(record: Mapping[str, Any]) -> PlatformFields:
    genres = _genres(record.get("genres"))
    if genres is None and isinstance(record.get("categories"), list):
        genres = [
            path
            for path in (as_str(c.get("path")) for c in get_list_of_dicts(record["categories"]))
            if path
        ]
    images = _mapped_images(record)
    header = _typed_image_url(record.get("keyImages"), EPIC_HEADER_IMAGE_TYPES)
    if header:
        images.setdefault("header", header)
    return PlatformFields(
        native_id=_id_str(first_present(record, "catalogItemId", "id")),
        playtime=_truthy_minutes(record.get("playtime")),
        genres=genres,
        images=images,
    )


def _amazon(record: Mapping[str, Any]) -> PlatformFields:
    # Passed through in the platform's own units.
    return PlatformFields(
        native_id=_id_str(record.get("id")),
        playtime=_truthy_minutes(record.get("playtime")),
        reported_playtime=as_minutes(record.get("playtime")),
        genres=_genres(record.get("genres")),
        images=_mapped_images(record),
    )


def extract_platform_fields(platform: Platform, record: Mapping[str, Any]) -> PlatformFields:
    match platform:
        case Platform.STEAM:
            return _steam(record)
        case Platform.XBOX:
            return _xbox(record)
        case Platform.GOG:
            return _gog(record)
        case Platform.EPIC:
            return _epic(record)
        case Platform.AMAZON:
            return _amazon(record)
        case _:
            assert_never(platform)
