"""Composer state: validate a pasted link and create the post."""
from __future__ import annotations

import logging

from ..platforms import InvalidUrlError, PlatformMatch, UnsupportedPlatformError, classify
from ..schemas import PostResponse, VideoMetadataResponse
from .api import BackendError, ViralApiClient
from .metadata import fetch_video_metadata
from .session import AuthSession

logger = logging.getLogger(__name__)


class Composer:
    def __init__(self, api: ViralApiClient, session: AuthSession) -> None:
        self.api = api
        self.session = session
        self.match: PlatformMatch | None = None
        self.metadata: VideoMetadataResponse | None = None
        self._metadata_url: str | None = None
        self.submitting = False
        self.error: str | None = None

    def detect(self, url: str) -> PlatformMatch | None:
        """Classify ``url`` the same way the server will; failures land in ``error``."""

        try:
            self.match = classify(url)
        except (InvalidUrlError, UnsupportedPlatformError) as exc:
            self.match = None
            self.error = str(exc)
            return None
        self.error = None
        return self.match

    def preview(self, url: str) -> VideoMetadataResponse:
        self.metadata = fetch_video_metadata(self.api, url)
        self._metadata_url = url
        return self.metadata

    def submit(self, video_url: str, *, title: str | None = None, description: str | None = None) -> PostResponse | None:
        self.session.require_identity()
        if self.submitting or self.detect(video_url) is None:
            return None

        thumbnail_url = None
        if self.metadata is not None and self._metadata_url == video_url:
            thumbnail_url = self.metadata.thumbnail_url or None

        self.submitting = True
        try:
            post = self.api.create_post(
                video_url.strip(),
                title=(title or "").strip() or None,
                description=(description or "").strip() or None,
                thumbnail_url=thumbnail_url,
            )
        except BackendError as exc:
            logger.exception("Failed to share %s", video_url)
            self.error = exc.message
            return None
        finally:
            self.submitting = False

        logger.info("Shared %s post %s", post.platform.value, post.id)
        self.metadata = None
        self._metadata_url = None
        return post


__all__ = ["Composer"]
