"""Infinite-scroll feed state."""
from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from ..constants import FEED_PAGE_SIZE
from ..schemas import PostResponse
from .api import BackendError, ViralApiClient
from .session import AuthSession
from .video_card import VideoCard

logger = logging.getLogger(__name__)


class FeedState:
    """Reverse-chronological list of posts, filled one page at a time.

    Page 1 replaces the list and later pages append. Child cards push their
    like/comment changes back through :meth:`patch`.
    """

    def __init__(self, api: ViralApiClient, session: AuthSession, *, page_size: int = FEED_PAGE_SIZE) -> None:
        self.api = api
        self.session = session
        self.page_size = page_size
        self.posts: list[PostResponse] = []
        self.page = 0
        self.has_more = True
        self.loading = False
        self.loading_more = False
        self.error: str | None = None

    @property
    def busy(self) -> bool:
        return self.loading or self.loading_more

    def load_page(self, page: int) -> bool:
        flag = "loading" if page == 1 else "loading_more"
        setattr(self, flag, True)
        try:
            result = self.api.feed_page(page)
        except BackendError as exc:
            logger.exception("Failed to load feed page %s", page)
            self.error = exc.message
            return False
        finally:
            setattr(self, flag, False)

        self.error = None
        if page == 1:
            self.posts = list(result.items)
        else:
            # Offset windows shift when new posts arrive; skip rows already shown.
            seen = {post.id for post in self.posts}
            self.posts.extend(post for post in result.items if post.id not in seen)
        self.page = page
        self.has_more = len(result.items) >= self.page_size
        return True

    def on_sentinel_visible(self) -> bool:
        """Fetch the next page when the end of the list scrolls into view."""

        if not self.has_more or self.busy:
            return False
        return self.load_page(self.page + 1)

    def refresh(self) -> bool:
        return self.load_page(1)

    def get(self, post_id: UUID) -> PostResponse | None:
        return next((post for post in self.posts if post.id == post_id), None)

    def patch(self, post_id: UUID, **fields: Any) -> PostResponse | None:
        """Merge ``fields`` into the cached post; returns the record it replaced."""

        for index, post in enumerate(self.posts):
            if post.id == post_id:
                self.posts[index] = post.model_copy(update=fields)
                return post
        return None

    def card_for(self, post: PostResponse) -> VideoCard:
        auto_play = bool(self.posts) and self.posts[0].id == post.id
        return VideoCard(self.api, self.session, post, on_patch=self.patch, auto_play=auto_play)


__all__ = ["FeedState"]
