from __future__ import annotations


def test_prefers_en_us_then_en_then_wildcard() -> None:
    from game_library_unifier.library.titles import resolve_localized_title

    assert resolve_localized_title({"*": "Star", "en": "En", "en-US": "Us"}) == "Us"
    assert resolve_localized_title({"*": "Star", "en": "En"}) == "En"
    assert resolve_localized_title({"de-DE": "Stern", "*": "Star"}) == "Star"


def test_falls_back_to_first_non_empty_value() -> None:
    from game_library_unifier.library.titles import resolve_localized_title

    assert resolve_localized_title({"en-US": "", "fr-FR": "Le Jeu", "de-DE": "Das Spiel"}) == "Le Jeu"


def test_empty_map_resolves_to_empty_string() -> None:
    from game_library_unifier.library.titles import resolve_localized_title

    assert resolve_localized_title({}) == ""
    assert resolve_localized_title({"en-US": None}) == ""


def test_extract_title_accepts_locale_maps_and_falls_back() -> None:
    from game_library_unifier.library.titles import UNKNOWN_TITLE, extract_title

    assert extract_title({"name": "Portal"}) == "Portal"
    assert extract_title({"title": {"*": "Gwent"}}) == "Gwent"
    assert extract_title({"name": "", "title": "Celeste"}) == "Celeste"
    assert extract_title({"id": 1}) == UNKNOWN_TITLE
