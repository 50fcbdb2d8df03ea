"""State behind a single video card: playback, likes and comments."""
from __future__ import annotations

import logging
from typing import Any, Callable
from uuid import UUID

from ..schemas import CommentResponse, LikeSummary, PostResponse
from .api import BackendError, ViralApiClient
from .session import AuthSession

logger = logging.getLogger(__name__)

VISIBILITY_THRESHOLD = 0.5
EMPTY_COMMENT_MESSAGE = "Comment cannot be empty"

PatchCallback = Callable[..., Any]


def _liked_by(post: PostResponse, viewer_id: UUID | None) -> bool:
    if viewer_id is None:
        return False
    return post.viewer_has_liked or any(like.user_id == viewer_id for like in post.likes)


class VideoCard:
    def __init__(
        self,
        api: ViralApiClient,
        session: AuthSession,
        post: PostResponse,
        *,
        on_patch: PatchCallback | None = None,
        auto_play: bool = False,
    ) -> None:
        self.api = api
        self.session = session
        self.post = post
        self._on_patch = on_patch

        self.visible = False
        self.playing = auto_play
        self.muted = True

        self.is_liked = _liked_by(post, session.user_id)
        self.like_pending = False

        self.comments: list[CommentResponse] | None = None
        self.comments_open = False
        self.error: str | None = None

    @property
    def post_id(self) -> UUID:
        return self.post.id

    # playback

    def on_visibility_change(self, ratio: float) -> None:
        """Play on entering the viewport, pause on leaving; manual toggles hold until the next transition."""

        visible = ratio >= VISIBILITY_THRESHOLD
        if visible == self.visible:
            return
        self.visible = visible
        self.playing = visible

    def toggle_play(self) -> None:
        self.playing = not self.playing

    def toggle_mute(self) -> None:
        self.muted = not self.muted

    # likes

    def _apply(self, **fields: Any) -> None:
        self.post = self.post.model_copy(update=fields)
        if self._on_patch is not None:
            self._on_patch(self.post.id, **fields)

    def _likes_after(self, liked: bool) -> list[LikeSummary]:
        # The like row id is unknown until the next fetch; viewer_has_liked carries membership meanwhile.
        if liked:
            return list(self.post.likes)
        return [like for like in self.post.likes if like.user_id != self.session.user_id]

    def toggle_like(self) -> bool:
        """Like or unlike optimistically; the local patch is reversed if the call fails."""

        if self.like_pending or self.session.user_id is None:
            return False

        was_liked = self.is_liked
        previous_count = self.post.likes_count
        previous_likes = list(self.post.likes)
        target = not was_liked

        self.like_pending = True
        self.is_liked = target
        self._apply(
            likes_count=max(previous_count + (1 if target else -1), 0),
            viewer_has_liked=target,
            likes=self._likes_after(target),
        )
        try:
            snapshot = self.api.like(self.post.id) if target else self.api.unlike(self.post.id)
        except BackendError as exc:
            logger.exception("Failed to %s post %s", "like" if target else "unlike", self.post.id)
            self.error = exc.message
            self.is_liked = was_liked
            self._apply(likes_count=previous_count, viewer_has_liked=was_liked, likes=previous_likes)
            return False
        finally:
            self.like_pending = False

        self.error = None
        self.is_liked = snapshot.viewer_has_liked
        self._apply(
            likes_count=snapshot.likes_count,
            comments_count=snapshot.comments_count,
            viewer_has_liked=snapshot.viewer_has_liked,
            likes=self._likes_after(snapshot.viewer_has_liked),
        )
        return True

    # comments

    def open_comments(self) -> list[CommentResponse]:
        """Expand the comment panel, fetching the list on first use only."""

        self.comments_open = True
        if self.comments is None:
            try:
                self.comments = self.api.list_comments(self.post.id)
            except BackendError as exc:
                logger.exception("Failed to load comments for post %s", self.post.id)
                self.error = exc.message
                return []
        return self.comments

    def close_comments(self) -> None:
        self.comments_open = False

    def add_comment(self, text: str) -> CommentResponse | None:
        content = (text or "").strip()
        if not content:
            self.error = EMPTY_COMMENT_MESSAGE
            return None
        if self.session.user_id is None:
            return None

        try:
            created = self.api.add_comment(self.post.id, content)
        except BackendError as exc:
            logger.exception("Failed to add comment to post %s", self.post.id)
            self.error = exc.message
            return None

        self.error = None
        # An unopened panel fetches the full list later, including this comment.
        if self.comments is not None:
            self.comments.append(created.comment)
        self._apply(comments_count=created.comments_count)
        return created.comment


__all__ = ["EMPTY_COMMENT_MESSAGE", "VISIBILITY_THRESHOLD", "VideoCard"]
