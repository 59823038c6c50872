from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def as_str(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip()


def as_minutes(value: object) -> int | None:
    """
    Playtime in minutes from a provider field.

    Platforms report whole minutes; fractional floats are truncated rather than rejected.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    return None


def first_present(record: Mapping[str, Any], *keys: str) -> Any:
    """
    Return the first value among `keys` that is neither missing, None, nor an empty string.
    """
    for k in keys:
        v = record.get(k)
        if v is None:
            continue
        if isinstance(v, str) and not v.strip():
            continue
        return v
    return None


def normalize_str_list(values: object) -> list[str]:
    """
    Normalize a list-ish value into a de-duped list of non-empty strings.

    Accepts only real lists; returns [] for anything else.
    """
    if not isinstance(values, list):
        return []
    out: list[str] = []
    seen: set[str] = set()
    for v in values:
        s = as_str(v)
        if not s:
            continue
        k = s.casefold()
        if k in seen:
            continue
        seen.add(k)
        out.append(s)
    return out


def get_list_of_dicts(value: Any) -> list[dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, dict)]
