from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..clients.steam_client import SteamLibraryClient
from ..schema import Platform
from ..utils import load_credentials
from ..utils.parse import as_str
from ..utils.source_selection import sources_to_platforms
from .library_cache import LibraryCache

LIBRARY_CACHE_FILE = "library_cache.json"


@dataclass(frozen=True)
class PipelineContext:
    cache_dir: Path
    credentials_path: Path
    sources: list[str]

    def credentials(self) -> dict[str, Any]:
        return load_credentials(self.credentials_path)

    def platforms(self) -> list[Platform]:
        return sources_to_platforms(self.sources)

    def library_cache(self) -> LibraryCache:
        return LibraryCache(self.cache_dir / LIBRARY_CACHE_FILE)

    def steam_settings(self) -> dict[str, str]:
        steam = self.credentials().get("steam") or {}
        if not isinstance(steam, dict):
            return {}
        return {k: as_str(v) for k, v in steam.items() if as_str(v)}

    def build_steam_client(self) -> SteamLibraryClient:
        api_key = self.steam_settings().get("api_key", "")
        if not api_key:
            raise SystemExit(
                f"Missing steam.api_key in {self.credentials_path}; "
                "add it or pass a --steam export file instead."
            )
        return SteamLibraryClient(api_key)
