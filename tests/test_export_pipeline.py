from __future__ import annotations

import json
from pathlib import Path

import pandas as pd


def test_unified_csv_columns_and_values(tmp_path: Path) -> None:
    from game_library_unifier.library.merge import merge_games
    from game_library_unifier.pipelines.export_pipeline import write_unified_csv
    from game_library_unifier.schema import EXPORT_COLUMNS

    games = merge_games(
        [{"appid": 620, "name": "Portal 2", "playtime_forever": 125}],
        [{"titleId": "9X", "name": "Portal 2"}],
        [{"id": "g1", "title": "Gwent"}],
    )
    out = write_unified_csv(games, tmp_path / "out" / "Games_Unified.csv")

    df = pd.read_csv(out, dtype=str, keep_default_na=False)
    assert list(df.columns) == list(EXPORT_COLUMNS)
    assert df["Name"].tolist() == ["Gwent", "Portal 2"]

    portal = df[df["Name"] == "Portal 2"].iloc[0]
    assert portal["Platforms"] == "Steam, Xbox"
    assert portal["PlatformCount"] == "2"
    assert portal["Steam_AppID"] == "620"
    assert portal["Xbox_TitleID"] == "9X"
    assert portal["Playtime_Steam"] == "125"
    assert portal["Playtime_Xbox"] == ""
    assert portal["Playtime"] == "2h 5m"
    assert portal["StoreURL_Steam"] == "https://store.steampowered.com/app/620"
    assert portal["StoreURL_Xbox"] == "https://www.xbox.com/games/store/9X"

    gwent = df[df["Name"] == "Gwent"].iloc[0]
    assert gwent["TotalPlaytime"] == ""
    assert gwent["StoreURL_Steam"] == ""


def test_csv_has_no_nan_tokens(tmp_path: Path) -> None:
    from game_library_unifier.library.merge import merge_games
    from game_library_unifier.pipelines.export_pipeline import write_unified_csv

    out = write_unified_csv(merge_games(gog_games=[{"title": "Gwent"}]), tmp_path / "o.csv")
    assert "nan" not in out.read_text(encoding="utf-8").lower()


def test_empty_library_still_writes_header(tmp_path: Path) -> None:
    from game_library_unifier.pipelines.export_pipeline import games_to_frame
    from game_library_unifier.schema import EXPORT_COLUMNS

    df = games_to_frame([])
    assert list(df.columns) == list(EXPORT_COLUMNS)
    assert df.empty


def test_unified_json(tmp_path: Path) -> None:
    from game_library_unifier.library.merge import merge_games
    from game_library_unifier.pipelines.export_pipeline import write_unified_json

    out = write_unified_json(merge_games([{"appid": 1, "name": "Tunic"}]), tmp_path / "u.json")
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data[0]["appId"] == {"steam": "1"}
    assert data[0]["platforms"] == [{"name": "Steam", "owned": True, "playtime": 0}]
