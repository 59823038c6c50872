from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..schema import Platform
from ..utils.parse import as_minutes, as_str, normalize_str_list


@dataclass
class PlatformEntry:
    name: Platform
    owned: bool = True
    playtime: int | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name.value, "owned": self.owned}
        if self.playtime is not None:
            out["playtime"] = self.playtime
        return out


@dataclass
class UnifiedGame:
    """
    One owned title merged across platforms.

    `id` is only stable within a single merge call. `app_id` and `playtime` are keyed by
    `Platform.key`; `platforms` keeps one entry per contributing raw record in processing
    order, so the same platform can appear twice.
    """

    id: str
    name: str
    platforms: list[PlatformEntry] = field(default_factory=list)
    app_id: dict[str, str] = field(default_factory=dict)
    playtime: dict[str, int] = field(default_factory=dict)
    images: dict[str, str] = field(default_factory=dict)
    genres: list[str] | None = None

    def platform_names(self) -> list[str]:
        return [p.name.value for p in self.platforms]

    def has_platform(self, platform: Platform) -> bool:
        return any(p.name is platform for p in self.platforms)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase record shape presentation layers consume."""
        out: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "platforms": [p.to_dict() for p in self.platforms],
            "appId": dict(self.app_id),
        }
        if self.playtime:
            out["playtime"] = dict(self.playtime)
        if self.images:
            out["images"] = dict(self.images)
        if self.genres is not None:
            out["genres"] = list(self.genres)
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UnifiedGame:
        platforms: list[PlatformEntry] = []
        for p in data.get("platforms") or []:
            if not isinstance(p, dict):
                continue
            try:
                name = Platform(p.get("name"))
            except ValueError:
                continue
            platforms.append(
                PlatformEntry(
                    name=name,
                    owned=bool(p.get("owned", True)),
                    playtime=as_minutes(p.get("playtime")),
                )
            )

        def _str_map(v: object) -> dict[str, str]:
            if not isinstance(v, dict):
                return {}
            return {str(k): as_str(x) for k, x in v.items() if as_str(x)}

        playtime: dict[str, int] = {}
        raw_playtime = data.get("playtime")
        if isinstance(raw_playtime, dict):
            for k, v in raw_playtime.items():
                minutes = as_minutes(v)
                if minutes is not None:
                    playtime[str(k)] = minutes

        genres = data.get("genres")
        return cls(
            id=as_str(data.get("id")),
            name=as_str(data.get("name")),
            platforms=platforms,
            app_id=_str_map(data.get("appId")),
            playtime=playtime,
            images=_str_map(data.get("images")),
            genres=normalize_str_list(genres) if isinstance(genres, list) else None,
        )
