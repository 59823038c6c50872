from __future__ import annotations

from ..schema import PLATFORM_ORDER, Platform


def parse_sources(
    raw: str, *, allowed: set[str], aliases: dict[str, list[str]] | None = None
) -> list[str]:
    """
    Parse a platform list string like:
      - "all"
      - "pc"
      - "steam,gog,epic"

    Returns a de-duplicated list in platform processing order.
    """
    s = str(raw or "").strip()
    if not s:
        raise SystemExit("Missing --source value")

    tokens = [t.strip().lower() for t in s.split(",") if t.strip()]
    picked: set[str] = set()

    if len(tokens) == 1 and tokens[0] == "all":
        picked = set(allowed)
    else:
        aliases = aliases or {}
        for t in tokens:
            if t in aliases:
                for x in aliases[t]:
                    if x not in allowed:
                        raise SystemExit(f"Unknown platform in alias '{t}': {x}")
                    picked.add(x)
                continue
            if t not in allowed:
                raise SystemExit(
                    f"Unknown platform: {t}. Allowed: {', '.join(sorted(allowed | set(aliases)))}"
                )
            picked.add(t)

    return [p.key for p in PLATFORM_ORDER if p.key in picked]


def sources_to_platforms(sources: list[str]) -> list[Platform]:
    return [Platform.from_key(s) for s in sources]
