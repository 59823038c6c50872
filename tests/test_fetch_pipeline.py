from __future__ import annotations


def test_failing_fetcher_degrades_to_empty_list() -> None:
    from game_library_unifier.pipelines.fetch_pipeline import fetch_all_libraries
    from game_library_unifier.schema import Platform

    def boom():
        raise RuntimeError("GOG down")

    failed: set[Platform] = set()
    out = fetch_all_libraries(
        {
            Platform.STEAM: lambda: [{"appid": 1, "name": "Tunic"}],
            Platform.GOG: boom,
            Platform.EPIC: lambda: {"not": "a list"},  # type: ignore[dict-item]
        },
        failed=failed,
    )
    assert set(out) == set(Platform)
    assert out[Platform.STEAM] == [{"appid": 1, "name": "Tunic"}]
    assert out[Platform.GOG] == []
    assert out[Platform.EPIC] == []
    assert out[Platform.XBOX] == []
    assert failed == {Platform.GOG, Platform.EPIC}


def test_no_fetchers_returns_all_platforms_empty() -> None:
    from game_library_unifier.pipelines.fetch_pipeline import fetch_all_libraries
    from game_library_unifier.schema import Platform

    out = fetch_all_libraries({})
    assert out == {p: [] for p in Platform}


def test_run_merge_uses_cache_and_saves_results(tmp_path) -> None:
    import json

    from game_library_unifier.pipelines.context import PipelineContext
    from game_library_unifier.pipelines.fetch_pipeline import run_merge
    from game_library_unifier.schema import Platform

    steam = tmp_path / "steam.json"
    steam.write_text(json.dumps([{"appid": 1, "name": "Tunic"}]), encoding="utf-8")
    ctx = PipelineContext(
        cache_dir=tmp_path / "cache",
        credentials_path=tmp_path / "missing.yaml",
        sources=["steam", "xbox"],
    )

    games = run_merge(ctx, exports={Platform.STEAM: steam})
    assert [g.name for g in games] == ["Tunic"]

    # Second run reads the cached Steam list even though the export changed.
    steam.write_text(json.dumps([{"appid": 2, "name": "Hades"}]), encoding="utf-8")
    cached = run_merge(ctx, exports={Platform.STEAM: steam}, use_cache=True)
    assert [g.name for g in cached] == ["Tunic"]

    fresh = run_merge(ctx, exports={Platform.STEAM: steam})
    assert [g.name for g in fresh] == ["Hades"]
    assert [g.name for g in ctx.library_cache().get_unified_games() or []] == ["Hades"]


def test_run_merge_skips_unselected_platforms(tmp_path) -> None:
    import json

    from game_library_unifier.pipelines.context import PipelineContext
    from game_library_unifier.pipelines.fetch_pipeline import run_merge
    from game_library_unifier.schema import Platform

    gog = tmp_path / "gog.json"
    gog.write_text(json.dumps([{"id": 1, "title": "Gwent"}]), encoding="utf-8")
    ctx = PipelineContext(
        cache_dir=tmp_path / "cache", credentials_path=tmp_path / "c.yaml", sources=["steam"]
    )
    assert run_merge(ctx, exports={Platform.GOG: gog}) == []


def test_steam_api_without_key_exits(tmp_path) -> None:
    import pytest

    from game_library_unifier.pipelines.context import PipelineContext
    from game_library_unifier.pipelines.fetch_pipeline import build_fetchers

    creds = tmp_path / "credentials.yaml"
    creds.write_text("steam:\n  steam_id: '123'\n", encoding="utf-8")
    ctx = PipelineContext(cache_dir=tmp_path, credentials_path=creds, sources=["steam"])
    with pytest.raises(SystemExit):
        build_fetchers(ctx, exports={}, use_steam_api=True)


def test_steam_api_fetcher_uses_credentials(tmp_path, monkeypatch) -> None:
    from game_library_unifier.clients.steam_client import SteamLibraryClient
    from game_library_unifier.pipelines.context import PipelineContext
    from game_library_unifier.pipelines.fetch_pipeline import build_fetchers
    from game_library_unifier.schema import Platform

    seen: list[str] = []

    def fake_owned(self, steam_id):
        seen.append(steam_id)
        return [{"appid": 1, "name": "Tunic"}]

    monkeypatch.setattr(SteamLibraryClient, "get_owned_games", fake_owned)
    creds = tmp_path / "credentials.yaml"
    creds.write_text("steam:\n  api_key: KEY\n  steam_id: '123'\n", encoding="utf-8")
    ctx = PipelineContext(cache_dir=tmp_path, credentials_path=creds, sources=["steam", "gog"])

    fetchers = build_fetchers(ctx, exports={}, use_steam_api=True)
    assert set(fetchers) == {Platform.STEAM}
    assert fetchers[Platform.STEAM]() == [{"appid": 1, "name": "Tunic"}]
    assert seen == ["123"]


def test_steam_http_failure_keeps_cached_library(tmp_path, monkeypatch, caplog) -> None:
    import requests

    from game_library_unifier.pipelines.context import PipelineContext
    from game_library_unifier.pipelines.fetch_pipeline import run_merge
    from game_library_unifier.schema import Platform

    class Forbidden:
        status_code = 403
        headers: dict[str, str] = {}

        def raise_for_status(self) -> None:
            e = requests.exceptions.HTTPError("403 Client Error: Forbidden")
            e.response = self
            raise e

    monkeypatch.setattr(requests.Session, "get", lambda self, url, **kwargs: Forbidden())
    monkeypatch.setattr("time.sleep", lambda s: None)

    creds = tmp_path / "credentials.yaml"
    creds.write_text("steam:\n  api_key: KEY\n  steam_id: '123'\n", encoding="utf-8")
    ctx = PipelineContext(cache_dir=tmp_path / "cache", credentials_path=creds, sources=["steam"])
    cache = ctx.library_cache()
    cache.save_platform_games(Platform.STEAM, [{"appid": 1, "name": "Tunic"}])

    with caplog.at_level("ERROR"):
        games = run_merge(ctx, exports={}, use_steam_api=True)

    assert games == []
    assert "[FETCH] Steam failed" in caplog.text
    assert cache.get_platform_games(Platform.STEAM) == [{"appid": 1, "name": "Tunic"}]
