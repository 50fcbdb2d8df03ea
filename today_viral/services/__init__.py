"""Convenience exports for service layer."""
from .auth_service import (
    decode_access_token,
    get_access_token,
    get_auth_provider,
    get_current_identity,
    get_current_profile,
    get_optional_identity,
    set_auth_provider,
    sign_in,
    sign_out,
    sign_up,
)
from .metadata_service import resolve_metadata
from .post_service import (
    create_post_comment,
    create_post_record,
    get_post_engagement_snapshot,
    get_post_record,
    list_feed_page,
    list_liked_posts,
    list_post_comments,
    list_posts_by_user,
    set_post_like_state,
)
from .profile_service import derive_username, ensure_profile, get_profile, update_profile

__all__ = [
    "create_post_comment",
    "create_post_record",
    "decode_access_token",
    "derive_username",
    "ensure_profile",
    "get_access_token",
    "get_auth_provider",
    "get_current_identity",
    "get_current_profile",
    "get_optional_identity",
    "get_post_engagement_snapshot",
    "get_post_record",
    "get_profile",
    "list_feed_page",
    "list_liked_posts",
    "list_post_comments",
    "list_posts_by_user",
    "resolve_metadata",
    "set_auth_provider",
    "set_post_like_state",
    "sign_in",
    "sign_out",
    "sign_up",
    "update_profile",
]
