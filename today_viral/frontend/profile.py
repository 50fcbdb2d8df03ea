"""Profile view state: the profile record, its posts and edit/save."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from ..constants import LANDING_ROUTE
from ..schemas import PostResponse, ProfileResponse
from .api import BackendError, ViralApiClient
from .session import AuthSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ProfileStats:
    posts: int = 0
    likes: int = 0
    comments: int = 0


class ProfileView:
    """Shows the signed-in user's profile, or another user's when ``user_id`` is given."""

    def __init__(self, api: ViralApiClient, session: AuthSession, *, user_id: UUID | None = None) -> None:
        self.api = api
        self.session = session
        self.user_id = user_id
        self.profile: ProfileResponse | None = None
        self.posts: list[PostResponse] = []
        self.liked_posts: list[PostResponse] = []
        self.saving = False
        self.error: str | None = None

    @property
    def is_own(self) -> bool:
        return self.user_id is None or self.user_id == self.session.user_id

    @property
    def stats(self) -> ProfileStats:
        return ProfileStats(
            posts=len(self.posts),
            likes=sum(post.likes_count for post in self.posts),
            comments=sum(post.comments_count for post in self.posts),
        )

    def load(self) -> bool:
        if self.is_own:
            self.session.require_identity()
        try:
            profile = self.api.get_profile(None if self.is_own else self.user_id)
            posts = self.api.user_posts(profile.id)
            liked = self.api.liked_posts() if self.is_own else []
        except BackendError as exc:
            logger.exception("Failed to load profile %s", self.user_id or "me")
            self.error = exc.message
            return False

        self.profile = profile
        self.posts = posts
        self.liked_posts = liked
        self.error = None
        return True

    def save(
        self,
        *,
        username: str,
        full_name: str | None = None,
        bio: str | None = None,
        website: str | None = None,
    ) -> bool:
        """Replace all editable fields; last write wins."""

        self.session.require_identity()
        if self.saving:
            return False
        self.saving = True
        try:
            updated = self.api.update_profile(username=username, full_name=full_name, bio=bio, website=website)
        except BackendError as exc:
            logger.exception("Failed to save profile")
            self.error = exc.message
            return False
        finally:
            self.saving = False

        self.profile = updated
        self.error = None
        self.session.replace_profile(updated)
        return True

    def sign_out(self) -> str:
        self.session.sign_out()
        self.profile = None
        self.posts = []
        self.liked_posts = []
        return LANDING_ROUTE


__all__ = ["ProfileStats", "ProfileView"]
