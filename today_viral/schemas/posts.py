"""Pydantic schemas for post resources."""
from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from ..constants import COMMENT_MAX_LENGTH, POST_TITLE_MAX_LENGTH
from ..platforms import Platform


class AuthorSummary(BaseModel):
    """Owner details embedded in posts and comments."""

    model_config = ConfigDict(from_attributes=True)

    username: str
    full_name: str | None = None
    avatar_url: str | None = None


class LikeSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID


class PostCreate(BaseModel):
    """Payload sent by the composer."""

    video_url: str = Field(..., min_length=1, max_length=2048)
    title: str | None = Field(default=None, max_length=POST_TITLE_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=2000)
    thumbnail_url: str | None = Field(default=None, max_length=1024)


class PostResponse(BaseModel):
    """Serialized representation of a persisted post."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    title: str
    description: str | None = None
    video_url: str
    platform: Platform = Platform.OTHER
    thumbnail_url: str | None = None
    likes_count: int = 0
    comments_count: int = 0
    created_at: datetime
    author: AuthorSummary | None = None
    # Only the requesting user's like records are embedded.
    likes: list[LikeSummary] = Field(default_factory=list)
    viewer_has_liked: bool = False


class PostListResponse(BaseModel):
    items: list[PostResponse]


class PostPageResponse(BaseModel):
    """One window of the reverse-chronological feed."""

    items: list[PostResponse]
    page: int
    page_size: int
    has_more: bool


class PostEngagementResponse(BaseModel):
    """Authoritative counters returned after a like or unlike."""

    post_id: UUID
    likes_count: int
    comments_count: int
    viewer_has_liked: bool


class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=COMMENT_MAX_LENGTH)


class CommentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    post_id: UUID
    user_id: UUID
    content: str
    created_at: datetime
    author: AuthorSummary | None = None


class CommentListResponse(BaseModel):
    items: list[CommentResponse]


class CommentCreatedResponse(BaseModel):
    comment: CommentResponse
    comments_count: int


__all__ = [
    "AuthorSummary",
    "CommentCreate",
    "CommentCreatedResponse",
    "CommentListResponse",
    "CommentResponse",
    "LikeSummary",
    "PostCreate",
    "PostEngagementResponse",
    "PostListResponse",
    "PostPageResponse",
    "PostResponse",
]
