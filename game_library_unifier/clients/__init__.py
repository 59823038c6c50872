"""API clients for platform library sources."""

from .http_client import HTTPJSONClient
from .steam_client import SteamLibraryClient

__all__ = [
    "HTTPJSONClient",
    "SteamLibraryClient",
]
