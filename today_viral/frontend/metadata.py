"""Video metadata lookup with a local fallback."""
from __future__ import annotations

import logging

from ..platforms import detect_platform
from ..schemas import VideoMetadataResponse
from .api import BackendError, ViralApiClient

logger = logging.getLogger(__name__)


def fetch_video_metadata(api: ViralApiClient, url: str) -> VideoMetadataResponse:
    """Ask the metadata endpoint about ``url``; defaults are returned when the call fails."""

    try:
        return api.metadata(url)
    except BackendError as exc:
        logger.warning("Metadata lookup failed for %s: %s", url, exc.message)
        return VideoMetadataResponse(platform=detect_platform(url))


__all__ = ["fetch_video_metadata"]
