"""
Tests for the YouTube catalog client (no network: httpx.MockTransport).
"""
import time
from concurrent.futures import ThreadPoolExecutor

import httpx
import pytest

from equilibrium_video import catalog as catalog_module
from equilibrium_video.catalog import (
    YouTubeCatalogClient,
    duration_filter,
    get_catalog_client,
    parse_iso8601_duration,
    reset_catalog_client,
)
from equilibrium_video.exceptions import CatalogError
from equilibrium_video.models import RequestOptions

SEARCH_BODY = {
    "items": [
        {"id": {"kind": "youtube#video", "videoId": "abc"}},
        {"id": {"kind": "youtube#channel", "channelId": "chan"}},
        {"id": {"kind": "youtube#video", "videoId": "def"}},
    ]
}

VIDEOS_BODY = {
    "items": [
        {
            "id": "abc",
            "snippet": {
                "title": "Sons da Natureza 4K",
                "description": "Chuva na floresta",
                "channelTitle": "Natureza Viva",
                "thumbnails": {"high": {"url": "https://i.ytimg.com/vi/abc/hqdefault.jpg"}},
                "tags": ["chuva", "floresta"],
            },
            "contentDetails": {"duration": "PT1H2M3S"},
        },
        {
            "id": "def",
            "snippet": {"title": "Respiração guiada", "channelTitle": "Respira"},
            "contentDetails": {"duration": "garbage"},
        },
    ]
}


def make_client(handler, api_key="test-key") -> YouTubeCatalogClient:
    return YouTubeCatalogClient(api_key=api_key, transport=httpx.MockTransport(handler))


def youtube_handler(requests_seen):
    def handler(request: httpx.Request) -> httpx.Response:
        requests_seen.append(request)
        if request.url.path.endswith("/search"):
            return httpx.Response(200, json=SEARCH_BODY)
        if request.url.path.endswith("/videos"):
            return httpx.Response(200, json=VIDEOS_BODY)
        return httpx.Response(404)
    return handler


@pytest.mark.parametrize(
    "raw, seconds",
    [
        ("PT1H2M3S", 3723),
        ("PT15M", 900),
        ("PT45S", 45),
        ("PT2H", 7200),
        ("P1DT1S", 86401),
        ("PT10.5S", 10),
        ("pt1m", 60),
        ("P0D", 0),
        ("", 0),
        (None, 0),
        ("PT", 0),
        ("P", 0),
        ("1:02:03", 0),
        ("P1W", 0),
    ],
)
def test_parse_iso8601_duration(raw, seconds):
    assert parse_iso8601_duration(raw) == seconds


def test_duration_filter():
    assert duration_filter("short") == "short"
    assert duration_filter("long") == "long"
    assert duration_filter(None) == "any"
    assert duration_filter("forever") == "any"


def test_search_videos_builds_candidates():
    seen = []
    client = make_client(youtube_handler(seen))
    options = RequestOptions(max_results=7, preferred_duration="long", language="en")

    videos = client.search_videos("sons da natureza", options)

    assert [v.video_id for v in videos] == ["abc", "def"]
    first = videos[0]
    assert first.title == "Sons da Natureza 4K"
    assert first.description == "Chuva na floresta"
    assert first.thumbnail_url == "https://i.ytimg.com/vi/abc/hqdefault.jpg"
    assert first.content_url == "https://www.youtube.com/watch?v=abc"
    assert first.duration_seconds == 3723
    assert first.channel_title == "Natureza Viva"
    assert first.tags == ("chuva", "floresta")

    second = videos[1]
    assert second.duration_seconds == 0
    assert second.tags == ()
    assert second.thumbnail_url is None

    search_params = seen[0].url.params
    assert search_params["q"] == "sons da natureza"
    assert search_params["type"] == "video"
    assert search_params["maxResults"] == "7"
    assert search_params["videoDuration"] == "long"
    assert search_params["relevanceLanguage"] == "en"
    assert search_params["safeSearch"] == "moderate"
    assert search_params["videoEmbeddable"] == "true"
    assert search_params["key"] == "test-key"

    details_params = seen[1].url.params
    assert details_params["id"] == "abc,def"
    assert details_params["part"] == "snippet,contentDetails,statistics"


def test_missing_api_key_returns_empty_without_calling_out():
    seen = []
    client = make_client(youtube_handler(seen), api_key="  ")

    assert client.search_videos("anything", RequestOptions()) == []
    assert seen == []


def test_http_error_degrades_to_empty():
    client = make_client(lambda request: httpx.Response(403, json={"error": "quota"}))

    assert client.search_videos("anything", RequestOptions()) == []


def test_transport_error_degrades_to_empty():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    client = make_client(handler)
    assert client.search_videos("anything", RequestOptions()) == []


def test_empty_search_skips_details_call():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"items": []})

    client = make_client(handler)
    assert client.search_videos("nothing", RequestOptions()) == []
    assert len(seen) == 1


def test_search_raises_catalog_error_on_bad_json():
    client = make_client(lambda request: httpx.Response(200, content=b"not json"))

    with pytest.raises(CatalogError):
        client.search("q", RequestOptions())


def test_catalog_client_is_built_once(monkeypatch):
    reset_catalog_client()
    monkeypatch.setenv("YOUTUBE_API_KEY", "env-key")
    try:
        first = get_catalog_client()
        second = get_catalog_client()

        assert first is second
        assert first.api_key == "env-key"
    finally:
        reset_catalog_client()
    assert catalog_module._CLIENT is None


@pytest.mark.parametrize(
    "details_response",
    [
        httpx.Response(500, json={"error": "backend"}),
        httpx.Response(200, content=b"not json"),
        httpx.Response(200, json={"items": [{"snippet": {"title": "no id"}}]}),
    ],
    ids=["server-error", "bad-json", "item-without-id"],
)
def test_details_failure_after_successful_search_degrades_to_empty(details_response):
    seen = []

    def handler(request):
        seen.append(request.url.path)
        if request.url.path.endswith("/search"):
            return httpx.Response(200, json=SEARCH_BODY)
        return details_response

    client = make_client(handler)

    assert client.search_videos("natureza", RequestOptions()) == []
    assert [path.rsplit("/", 1)[-1] for path in seen] == ["search", "videos"]


def test_catalog_client_is_built_once_across_threads(monkeypatch):
    reset_catalog_client()
    monkeypatch.setenv("YOUTUBE_API_KEY", "env-key")
    built = []
    real_init = YouTubeCatalogClient.__init__

    def slow_init(self, *args, **kwargs):
        built.append(self)
        time.sleep(0.01)
        real_init(self, *args, **kwargs)

    monkeypatch.setattr(YouTubeCatalogClient, "__init__", slow_init)
    try:
        with ThreadPoolExecutor(max_workers=8) as pool:
            clients = list(pool.map(lambda _: get_catalog_client(), range(8)))

        assert len(built) == 1
        assert all(c is clients[0] for c in clients)
    finally:
        reset_catalog_client()
