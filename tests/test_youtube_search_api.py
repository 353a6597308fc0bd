from __future__ import annotations

import importlib
import sys

import pytest

fastapi = pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from engine.video_lookup import VideoResult
from engine.youtube_search import YouTubeSearchError


class _FakeLookup:
    def __init__(self, videos=None, error=None):
        self.videos = videos or []
        self.error = error
        self.calls = []

    def find_chart_videos(self, song_title, difficulty=""):
        self.calls.append((song_title, difficulty))
        if self.error is not None:
            raise self.error
        return list(self.videos)


def _build_client(lookup) -> TestClient:
    sys.modules.pop("api.main", None)
    module = importlib.import_module("api.main")
    module.app.state.lookup = lookup
    return TestClient(module.app)


def test_search_returns_video_descriptors() -> None:
    lookup = _FakeLookup(
        videos=[
            VideoResult(
                id="abc",
                title="Fractures FTR Chart View",
                channel_title="Chart Player",
                video_url="https://www.youtube.com/watch?v=abc",
            )
        ]
    )
    client = _build_client(lookup)

    response = client.get("/api/youtube-search", params={"songTitle": "Fractures", "songDifficulty": "Future"})

    assert response.status_code == 200
    assert response.json() == [
        {
            "id": "abc",
            "title": "Fractures FTR Chart View",
            "channelTitle": "Chart Player",
            "videoUrl": "https://www.youtube.com/watch?v=abc",
        }
    ]
    assert response.headers["access-control-allow-origin"] == "*"
    assert lookup.calls == [("Fractures", "Future")]


def test_missing_difficulty_passes_empty_string() -> None:
    lookup = _FakeLookup()
    client = _build_client(lookup)

    response = client.get("/api/youtube-search", params={"songTitle": "Testify"})

    assert response.status_code == 200
    assert response.json() == []
    assert lookup.calls == [("Testify", "")]


def test_repeated_difficulty_uses_first_value() -> None:
    lookup = _FakeLookup()
    client = _build_client(lookup)

    client.get("/api/youtube-search?songTitle=Testify&songDifficulty=Past&songDifficulty=Beyond")

    assert lookup.calls == [("Testify", "Past")]


@pytest.mark.parametrize("query", ["", "?songTitle=", "?songTitle=%20%20"])
def test_song_title_is_required(query: str) -> None:
    lookup = _FakeLookup()
    client = _build_client(lookup)

    response = client.get(f"/api/youtube-search{query}")

    assert response.status_code == 400
    assert response.json() == {"error": "songTitle parameter is required"}
    assert lookup.calls == []


def test_search_failure_returns_500() -> None:
    client = _build_client(_FakeLookup(error=YouTubeSearchError("boom")))

    response = client.get("/api/youtube-search", params={"songTitle": "Fractures"})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to search YouTube videos"}


def test_options_preflight() -> None:
    client = _build_client(_FakeLookup())

    response = client.options("/api/youtube-search")

    assert response.status_code == 200
    assert response.headers["access-control-allow-methods"] == "GET, OPTIONS"
    assert response.headers["access-control-allow-headers"] == "Content-Type"


def test_health() -> None:
    client = _build_client(_FakeLookup())

    assert client.get("/api/health").json() == {"status": "ok"}


def test_build_lookup_service_without_key_or_cache(monkeypatch) -> None:
    sys.modules.pop("api.main", None)
    module = importlib.import_module("api.main")
    monkeypatch.setattr(module.settings, "YOUTUBE_API_KEY", "your_youtube_api_key_here")
    monkeypatch.setattr(module.settings, "CACHE_ENABLED", False)

    service = module.build_lookup_service()

    assert service.search_client is None
    assert service.store is None
    assert service.find_chart_videos("Fractures", "Future") == []


def test_build_lookup_service_uses_configured_store(monkeypatch, tmp_path) -> None:
    sys.modules.pop("api.main", None)
    module = importlib.import_module("api.main")
    monkeypatch.setattr(module.settings, "YOUTUBE_API_KEY", "")
    monkeypatch.setattr(module.settings, "CACHE_ENABLED", True)
    monkeypatch.setattr(module.settings, "DB_PATH", tmp_path / "cache.sqlite")

    service = module.build_lookup_service()

    assert service.store.db_path == str(tmp_path / "cache.sqlite")


def test_unexpected_lookup_failure_returns_json_500() -> None:
    client = _build_client(_FakeLookup(error=TimeoutError("timed out")))

    response = client.get("/api/youtube-search", params={"songTitle": "Fractures"})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to search YouTube videos"}
    assert response.headers["access-control-allow-origin"] == "*"


def test_unsupported_method_returns_json_405() -> None:
    client = _build_client(_FakeLookup())

    response = client.post("/api/youtube-search", params={"songTitle": "Fractures"})

    assert response.status_code == 405
    assert response.json() == {"error": "Method not allowed"}
    assert response.headers["access-control-allow-origin"] == "*"
