from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Any

from ..config import CLI
from ..library.merge import merge_games
from ..library.models import UnifiedGame
from ..schema import PLATFORM_ORDER, Platform
from ..sources.local_exports import load_platform_export
from .context import PipelineContext

Fetcher = Callable[[], list[dict[str, Any]]]


def _run_fetcher(platform: Platform, fn: Fetcher) -> list[dict[str, Any]]:
    t0 = time.perf_counter()
    games = fn()
    if not isinstance(games, list):
        raise TypeError(f"fetcher returned {type(games).__name__}, expected list")
    elapsed_ms = int(round((time.perf_counter() - t0) * 1000.0))
    logging.info(f"[FETCH] {platform.value}: {len(games)} games ({elapsed_ms}ms)")
    return games


def fetch_all_libraries(
    fetchers: Mapping[Platform, Fetcher],
    *,
    max_workers: int | None = None,
    failed: set[Platform] | None = None,
) -> dict[Platform, list[dict[str, Any]]]:
    """
    Run every platform fetcher concurrently; one platform failing never aborts the others.

    A fetcher that raises (or returns something other than a list) contributes an empty list
    and is added to `failed` when a set is passed. Every platform is present in the result,
    including ones without a fetcher.
    """
    out: dict[Platform, list[dict[str, Any]]] = {p: [] for p in PLATFORM_ORDER}
    if not fetchers:
        return out

    workers = max_workers or int(getattr(CLI, "max_parallel_platforms", 5) or 5)
    workers = max(1, min(workers, len(fetchers)))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {
            executor.submit(_run_fetcher, platform, fn): platform
            for platform, fn in fetchers.items()
        }
        for future in as_completed(futures):
            platform = futures[future]
            try:
                out[platform] = future.result()
            except Exception as e:
                logging.error(
                    f"[FETCH] {platform.value} failed, continuing without it: "
                    f"{type(e).__name__}: {e}"
                )
                if failed is not None:
                    failed.add(platform)
    return out


def build_fetchers(
    ctx: PipelineContext,
    *,
    exports: Mapping[Platform, Path],
    steam_id: str | None = None,
    use_steam_api: bool = False,
) -> dict[Platform, Fetcher]:
    """
    One fetcher per selected platform: an export file when given, else the Steam Web API for
    Steam when requested. Platforms with neither are skipped.
    """
    fetchers: dict[Platform, Fetcher] = {}
    for platform in ctx.platforms():
        path = exports.get(platform)
        if path is not None:
            fetchers[platform] = lambda p=platform, f=path: load_platform_export(f, p)
            continue
        if platform is Platform.STEAM and use_steam_api:
            client = ctx.build_steam_client()
            sid = steam_id or ctx.steam_settings().get("steam_id", "")
            if not sid:
                raise SystemExit("Missing Steam ID; pass --steam-id or set steam.steam_id")

            def _fetch_steam(c=client, s=sid) -> list[dict[str, Any]]:
                games = c.get_owned_games(s)
                logging.info(f"[STEAM] {c.format_stats()}")
                return games

            fetchers[platform] = _fetch_steam
    return fetchers


def run_merge(
    ctx: PipelineContext,
    *,
    exports: Mapping[Platform, Path],
    steam_id: str | None = None,
    use_steam_api: bool = False,
    use_cache: bool = False,
) -> list[UnifiedGame]:
    cache = ctx.library_cache()
    fetchers = build_fetchers(ctx, exports=exports, steam_id=steam_id, use_steam_api=use_steam_api)

    cached: dict[Platform, list[dict[str, Any]]] = {}
    if use_cache:
        for platform in list(fetchers):
            games = cache.get_platform_games(platform)
            if games is not None:
                cached[platform] = games
                del fetchers[platform]

    if not fetchers and not cached:
        logging.warning("[MERGE] No platform sources configured; the library will be empty")

    failed: set[Platform] = set()
    libraries = fetch_all_libraries(fetchers, failed=failed)
    for platform in fetchers:
        if platform not in failed:
            cache.save_platform_games(platform, libraries[platform])
    libraries.update(cached)

    games = merge_games(
        libraries[Platform.STEAM],
        libraries[Platform.XBOX],
        libraries[Platform.GOG],
        libraries[Platform.EPIC],
        libraries[Platform.AMAZON],
    )
    multi = sum(1 for g in games if len(g.platforms) > 1)
    logging.info(f"[MERGE] Unified library: {len(games)} games ({multi} on multiple platforms)")
    cache.save_unified_games(games)
    return games
