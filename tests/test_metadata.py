"""Tests for the oEmbed-backed metadata lookup."""
from __future__ import annotations

import asyncio

import httpx

from today_viral.frontend import BackendError, fetch_video_metadata
from today_viral.platforms import Platform
from today_viral.services import resolve_metadata


def test_youtube_metadata_from_oembed() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "title": "Big Wave",
                "author_name": "Surfer",
                "thumbnail_url": "https://i.ytimg.com/vi/abc/hqdefault.jpg",
            },
        )

    result = asyncio.run(resolve_metadata("https://youtu.be/abc", transport=httpx.MockTransport(handler)))

    assert result.title == "Big Wave"
    assert result.description == "By Surfer"
    assert result.thumbnail_url == "https://i.ytimg.com/vi/abc/hqdefault.jpg"
    assert result.duration == 0
    assert result.platform is Platform.YOUTUBE
    assert seen[0].url.params["url"] == "https://youtu.be/abc"


def test_upstream_failure_falls_back_to_defaults() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(503))

    result = asyncio.run(resolve_metadata("https://www.tiktok.com/@u/video/1", transport=transport))

    assert result.title == "Viral Video"
    assert result.description == "Shared via Today Viral"
    assert result.thumbnail_url == ""
    assert result.platform is Platform.TIKTOK


def test_platforms_without_oembed_skip_the_network() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    result = asyncio.run(resolve_metadata("https://fb.watch/x/", transport=httpx.MockTransport(handler)))
    assert result.platform is Platform.FACEBOOK
    assert result.title == "Viral Video"


def test_metadata_endpoint(client) -> None:
    response = client.get("/api/metadata", params={"url": "https://www.instagram.com/reel/abc/"})
    assert response.status_code == 200
    assert response.json() == {
        "title": "Viral Video",
        "description": "Shared via Today Viral",
        "thumbnail_url": "",
        "duration": 0,
        "platform": "instagram",
    }

    assert client.get("/api/metadata").status_code == 422


class _UnreachableApi:
    def metadata(self, url: str):
        raise BackendError("Service unavailable")


def test_client_helper_falls_back_when_endpoint_fails() -> None:
    result = fetch_video_metadata(_UnreachableApi(), "https://youtu.be/abc")
    assert result.title == "Viral Video"
    assert result.platform is Platform.YOUTUBE
