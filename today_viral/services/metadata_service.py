"""Resolve display metadata for shared video links via public oEmbed endpoints."""
from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import get_settings
from ..platforms import Platform, detect_platform
from ..schemas.metadata import DEFAULT_DESCRIPTION, DEFAULT_TITLE, VideoMetadataResponse

logger = logging.getLogger(__name__)


def _oembed_endpoint(platform: Platform) -> str | None:
    settings = get_settings()
    if platform is Platform.YOUTUBE:
        return settings.youtube_oembed_url
    if platform is Platform.TIKTOK:
        return settings.tiktok_oembed_url
    return None


def _text(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


async def resolve_metadata(
    url: str,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> VideoMetadataResponse:
    """Return title, description, thumbnail and duration for ``url``.

    Platforms without a keyless oEmbed endpoint, and any upstream failure,
    yield the generic fallback record.
    """

    platform = detect_platform(url)
    endpoint = _oembed_endpoint(platform)
    if endpoint is None:
        return VideoMetadataResponse(platform=platform)

    try:
        async with httpx.AsyncClient(
            timeout=get_settings().http_timeout,
            transport=transport,
            follow_redirects=True,
        ) as client:
            response = await client.get(endpoint, params={"url": url, "format": "json"})
            response.raise_for_status()
            data = response.json()
    except (httpx.HTTPError, ValueError):
        logger.exception("oEmbed lookup failed for %s", platform.value)
        return VideoMetadataResponse(platform=platform)

    if not isinstance(data, dict):
        return VideoMetadataResponse(platform=platform)

    author = _text(data, "author_name")
    duration = data.get("duration")
    return VideoMetadataResponse(
        title=_text(data, "title") or DEFAULT_TITLE,
        description=f"By {author}" if author else DEFAULT_DESCRIPTION,
        thumbnail_url=_text(data, "thumbnail_url") or "",
        duration=int(duration) if isinstance(duration, (int, float)) else 0,
        platform=platform,
    )


__all__ = ["resolve_metadata"]
