"""Profile routes."""
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..clients.auth_provider import Identity
from ..database import get_session
from ..models import Profile
from ..schemas import PostListResponse, PostResponse, ProfileResponse, ProfileUpdateRequest
from ..services import (
    get_current_profile,
    get_optional_identity,
    get_profile,
    list_liked_posts,
    list_posts_by_user,
    update_profile,
)

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get("/me", response_model=ProfileResponse)
async def my_profile(current_profile: Profile = Depends(get_current_profile)) -> ProfileResponse:
    return ProfileResponse.model_validate(current_profile)


@router.put("/me", response_model=ProfileResponse)
async def update_my_profile(
    payload: ProfileUpdateRequest,
    current_profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_session),
) -> ProfileResponse:
    """Replace the logged-in user's username, full name, bio and website."""

    updated = update_profile(db, user_id=current_profile.id, payload=payload)
    return ProfileResponse.model_validate(updated)


@router.get("/me/liked", response_model=PostListResponse)
async def my_liked_posts(
    current_profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_session),
) -> PostListResponse:
    items = list_liked_posts(db, user_id=current_profile.id)
    return PostListResponse(items=[PostResponse.model_validate(item) for item in items])


@router.get("/{user_id}", response_model=ProfileResponse)
async def retrieve_profile(
    user_id: UUID,
    db: Session = Depends(get_session),
) -> ProfileResponse:
    return ProfileResponse.model_validate(get_profile(db, user_id))


@router.get("/{user_id}/posts", response_model=PostListResponse)
async def profile_posts(
    user_id: UUID,
    db: Session = Depends(get_session),
    identity: Identity | None = Depends(get_optional_identity),
) -> PostListResponse:
    get_profile(db, user_id)
    viewer_id = identity.id if identity is not None else None
    items = list_posts_by_user(db, author_id=user_id, viewer_id=viewer_id)
    return PostListResponse(items=[PostResponse.model_validate(item) for item in items])
