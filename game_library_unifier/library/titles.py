from __future__ import annotations

import re
import unicodedata
from collections.abc import Mapping
from typing import Any, TypeAlias

UNKNOWN_TITLE = "Unknown Game"

# Locale-keyed title maps (GOG GamesDB, Xbox title hub) look like {"en-US": "...", "*": "..."}.
LocaleMap: TypeAlias = Mapping[str, Any]
Title: TypeAlias = str | LocaleMap

LOCALE_FALLBACKS: tuple[str, ...] = ("en-US", "en", "*")

# Storefront branding appended to titles by Amazon; cosmetic, never part of identity.
_DECORATIVE_SUFFIX_RES = (
    re.compile(r" - Amazon Prime$", re.IGNORECASE),
    re.compile(r" - Prime Gaming$", re.IGNORECASE),
)


def resolve_localized_title(title: LocaleMap) -> str:
    """
    Pick a display string out of a locale map.

    Fallback chain: en-US -> en -> * -> first non-empty value. Returns "" when the map holds
    nothing usable.
    """
    for loc in LOCALE_FALLBACKS:
        v = title.get(loc)
        if isinstance(v, str) and v:
            return v
    for v in title.values():
        if isinstance(v, str) and v:
            return v
    return ""


def _title_text(value: Title | None) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        return resolve_localized_title(value)
    return ""


def extract_title(record: Mapping[str, Any]) -> str:
    """
    Title string of a raw platform record: `name`, then `title`, then UNKNOWN_TITLE.
    """
    for key in ("name", "title"):
        text = _title_text(record.get(key))
        if text:
            return text
    return UNKNOWN_TITLE


def _strip_decorative_suffixes(name: str) -> str:
    s = name
    for rx in _DECORATIVE_SUFFIX_RES:
        s = rx.sub("", s)
    return s


def clean_display_title(name: str) -> str:
    """Drop storefront branding suffixes; otherwise keep the title as-is."""
    return _strip_decorative_suffixes(name or "").strip()


def normalize_title(name: str) -> str:
    """
    Identity key used to decide whether two platform records are the same game.

    - strip storefront branding suffixes
    - lowercase
    - drop everything that is not a word character or whitespace
    - collapse whitespace
    """
    s = _strip_decorative_suffixes(name or "").lower()
    s = re.sub(r"[^\w\s]", "", s)
    s = re.sub(r"\s+", " ", s)
    return s.strip()


def _primary_weight(ch: str) -> tuple[int, str]:
    if ch.isspace():
        return 0, " "
    if ch.isdigit():
        return 2, ch
    if ch.isalpha():
        return 3, ch
    return 1, ch


def locale_sort_key(name: str) -> tuple[tuple[tuple[int, str], ...], str, str]:
    """
    Sort key approximating a locale-aware collation for display names.

    Characters compare by class first (whitespace, punctuation, digits, letters), so
    "Game: X" sorts before "Game2". Accents and case only break ties, so "Élan" sorts with
    "Elan" and "apple" before "Banana".
    """
    folded = (name or "").casefold()
    base = "".join(
        ch for ch in unicodedata.normalize("NFKD", folded) if not unicodedata.combining(ch)
    )
    return tuple(_primary_weight(ch) for ch in base), folded, name or ""
