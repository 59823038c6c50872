from __future__ import annotations


def test_normalize_title_lowercases_and_drops_punctuation() -> None:
    from game_library_unifier.library.titles import normalize_title

    assert normalize_title("Halo: Infinite") == "halo infinite"
    assert normalize_title("Baldur's Gate 3") == "baldurs gate 3"
    assert normalize_title("DOOM (2016)") == "doom 2016"


def test_normalize_title_collapses_whitespace() -> None:
    from game_library_unifier.library.titles import normalize_title

    assert normalize_title("  Hollow   Knight \t") == "hollow knight"
    assert normalize_title("Half-Life 2") == "halflife 2"


def test_normalize_title_strips_storefront_suffixes() -> None:
    from game_library_unifier.library.titles import normalize_title

    assert normalize_title("Control - Amazon Prime") == "control"
    assert normalize_title("Control - PRIME GAMING") == "control"
    # Only a trailing suffix is branding.
    assert normalize_title("Amazon Prime - Control") == "amazon prime control"


def test_normalize_title_is_idempotent() -> None:
    from game_library_unifier.library.titles import normalize_title

    for name in ("Halo Infinite", "Counter-Strike 2", "Control - Amazon Prime", "Ōkami HD", ""):
        once = normalize_title(name)
        assert normalize_title(once) == once


def test_normalize_title_keeps_unicode_word_characters() -> None:
    from game_library_unifier.library.titles import normalize_title

    assert normalize_title("Ōkami HD") == "ōkami hd"


def test_clean_display_title_only_removes_suffix() -> None:
    from game_library_unifier.library.titles import clean_display_title

    assert clean_display_title("Control - Amazon Prime") == "Control"
    assert clean_display_title("Fallout 3: GOTY") == "Fallout 3: GOTY"


def test_locale_sort_key_ignores_case_and_accents() -> None:
    from game_library_unifier.library.titles import locale_sort_key

    names = ["banana", "Éclair", "apple", "Zelda", "eclipse"]
    assert sorted(names, key=locale_sort_key) == ["apple", "banana", "Éclair", "eclipse", "Zelda"]


def test_locale_sort_key_orders_punctuation_before_digits_before_letters() -> None:
    from game_library_unifier.library.titles import locale_sort_key

    names = ["Game2", "GameX", "Game: X", "Game X", "game"]
    assert sorted(names, key=locale_sort_key) == ["game", "Game X", "Game: X", "Game2", "GameX"]
    assert sorted(["Zelda", "1942", "(Untitled)"], key=locale_sort_key) == [
        "(Untitled)",
        "1942",
        "Zelda",
    ]
