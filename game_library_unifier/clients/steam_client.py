from __future__ import annotations

import logging
from typing import Any

import requests

from ..config import RETRY, STEAM
from ..utils.parse import as_str, get_list_of_dicts
from ..utils.utilities import RateLimiter
from .http_client import HTTPJSONClient

STEAM_OWNED_GAMES_PATH = "/IPlayerService/GetOwnedGames/v0001/"

_REQUEST_FAILED = object()


class SteamLibraryClient:
    """
    Owned-games source backed by the Steam Web API.

    Returns raw `response.games` entries (appid, name, playtime_forever, img_icon_url, ...)
    untouched; shaping them into unified records is the merge step's job. Requests that still
    fail after retries raise `RuntimeError` instead of reading as an empty library.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = STEAM.api_base_url,
        min_interval_s: float = STEAM.min_interval_s,
        session: requests.Session | None = None,
    ):
        if not as_str(api_key):
            raise ValueError("Steam Web API key is required")
        self._api_key = as_str(api_key)
        self._base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self.stats: dict[str, int] = {
            "owned_games_fetch": 0,
            # HTTP request counters (attempts, including retries).
            "http_owned_games": 0,
        }
        self._owned_games_http = HTTPJSONClient(
            self._session,
            stats=self.stats,
            ratelimiter=RateLimiter(min_interval_s=min_interval_s),
            retries=RETRY.retries,
            counter_key="http_owned_games",
            context_prefix="Steam GetOwnedGames",
        )

    def get_owned_games(self, steam_id: str) -> list[dict[str, Any]]:
        sid = as_str(steam_id)
        if not sid:
            raise ValueError("Steam ID is required")

        self.stats["owned_games_fetch"] += 1
        params = {
            "key": self._api_key,
            "steamid": sid,
            "format": "json",
            "include_appinfo": "true",
            "include_played_free_games": "true" if STEAM.include_played_free_games else "false",
        }
        data = self._owned_games_http.get_json(
            f"{self._base_url}{STEAM_OWNED_GAMES_PATH}",
            params=params,
            context=f"steamid={sid}",
            on_fail_return=_REQUEST_FAILED,
        )
        if data is _REQUEST_FAILED:
            raise RuntimeError(f"Steam GetOwnedGames failed for {sid} after retries")
        if not isinstance(data, dict):
            return []
        response = data.get("response")
        if not isinstance(response, dict):
            return []
        games = get_list_of_dicts(response.get("games"))
        # Private profiles answer 200 with an empty response object.
        if not games and "game_count" not in response:
            logging.warning(f"[STEAM] No games visible for {sid}; is the profile private?")
        logging.info(f"[STEAM] Owned games for {sid}: {len(games)}")
        return games

    def format_stats(self) -> str:
        return (
            f"fetches={self.stats.get('owned_games_fetch', 0)} "
            f"{HTTPJSONClient.format_timing(self.stats, key='http_owned_games')}"
        )
