from __future__ import annotations


def test_xbox_typed_images_and_title_id() -> None:
    from game_library_unifier.library.extract import extract_platform_fields
    from game_library_unifier.schema import Platform

    fields = extract_platform_fields(
        Platform.XBOX,
        {
            "titleId": "1234",
            "id": "ignored",
            "name": "Forza Horizon 5",
            "images": [
                {"type": "Screenshot", "url": "https://x/shot.png"},
                {"type": "BoxArt", "url": "https://x/box.png"},
                {"type": "Icon", "url": "https://x/icon.png"},
            ],
        },
    )
    assert fields.native_id == "1234"
    assert fields.playtime is None
    assert fields.images == {"header": "https://x/box.png", "icon": "https://x/icon.png"}


def test_xbox_falls_back_to_id() -> None:
    from game_library_unifier.library.extract import extract_platform_fields
    from game_library_unifier.schema import Platform

    fields = extract_platform_fields(Platform.XBOX, {"id": 77, "name": "Starfield"})
    assert fields.native_id == "77"


def test_gog_image_sets_header_and_icon() -> None:
    from game_library_unifier.library.extract import extract_platform_fields
    from game_library_unifier.schema import Platform

    fields = extract_platform_fields(
        Platform.GOG, {"id": 1, "title": "Disco Elysium", "image": "https://gog/de.jpg"}
    )
    assert fields.images == {"header": "https://gog/de.jpg", "icon": "https://gog/de.jpg"}


def test_epic_explicit_genres_win_over_categories() -> None:
    from game_library_unifier.library.extract import extract_platform_fields
    from game_library_unifier.schema import Platform

    fields = extract_platform_fields(
        Platform.EPIC,
        {"catalogItemId": "c", "genres": ["Racing"], "categories": [{"path": "games"}]},
    )
    assert fields.genres == ["Racing"]


def test_epic_key_images_header() -> None:
    from game_library_unifier.library.extract import extract_platform_fields
    from game_library_unifier.schema import Platform

    fields = extract_platform_fields(
        Platform.EPIC,
        {
            "id": "offer",
            "keyImages": [
                {"type": "Thumbnail", "url": "https://e/thumb.png"},
                {"type": "DieselGameBoxTall", "url": "https://e/tall.png"},
            ],
        },
    )
    assert fields.native_id == "offer"
    assert fields.images == {"header": "https://e/tall.png"}


def test_non_steam_zero_playtime_is_not_supplied() -> None:
    from game_library_unifier.library.extract import extract_platform_fields
    from game_library_unifier.schema import Platform

    assert extract_platform_fields(Platform.AMAZON, {"id": "a", "playtime": 0}).playtime is None
    assert extract_platform_fields(Platform.AMAZON, {"id": "a", "playtime": 42}).playtime == 42
    assert extract_platform_fields(Platform.GOG, {"id": "g", "playtime": "12"}).playtime is None


def test_steam_icon_requires_appid() -> None:
    from game_library_unifier.library.extract import extract_platform_fields
    from game_library_unifier.schema import Platform

    fields = extract_platform_fields(Platform.STEAM, {"name": "Odd", "img_icon_url": "abc"})
    assert fields.images == {}
    assert fields.playtime == 0


def test_amazon_zero_playtime_stays_on_platform_entry() -> None:
    from game_library_unifier.library.extract import extract_platform_fields
    from game_library_unifier.library.merge import merge_games
    from game_library_unifier.schema import Platform

    fields = extract_platform_fields(Platform.AMAZON, {"id": "a", "playtime": 0})
    assert fields.playtime is None
    assert fields.entry_playtime == 0

    g = merge_games(amazon_games=[{"id": "a", "title": "Fallout 76", "playtime": 0}])[0]
    assert g.platforms[0].playtime == 0
    assert g.playtime == {}
    assert g.to_dict()["platforms"] == [{"name": "Amazon Games", "owned": True, "playtime": 0}]
