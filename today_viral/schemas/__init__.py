"""Convenience exports for schema layer."""
from .auth import AuthResponse, MeResponse, SignInRequest, SignUpRequest
from .metadata import VideoMetadataResponse
from .posts import (
    AuthorSummary,
    CommentCreate,
    CommentCreatedResponse,
    CommentListResponse,
    CommentResponse,
    LikeSummary,
    PostCreate,
    PostEngagementResponse,
    PostListResponse,
    PostPageResponse,
    PostResponse,
)
from .profiles import ProfileResponse, ProfileUpdateRequest

__all__ = [
    "AuthResponse",
    "AuthorSummary",
    "CommentCreate",
    "CommentCreatedResponse",
    "CommentListResponse",
    "CommentResponse",
    "LikeSummary",
    "MeResponse",
    "PostCreate",
    "PostEngagementResponse",
    "PostListResponse",
    "PostPageResponse",
    "PostResponse",
    "ProfileResponse",
    "ProfileUpdateRequest",
    "SignInRequest",
    "SignUpRequest",
    "VideoMetadataResponse",
]
