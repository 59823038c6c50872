"""Library unification: merge per-platform game lists into one catalog."""

from .links import format_playtime, store_url, total_playtime
from .merge import merge_games
from .models import PlatformEntry, UnifiedGame
from .titles import clean_display_title, normalize_title, resolve_localized_title

__all__ = [
    "PlatformEntry",
    "UnifiedGame",
    "clean_display_title",
    "format_playtime",
    "merge_games",
    "normalize_title",
    "resolve_localized_title",
    "store_url",
    "total_playtime",
]
