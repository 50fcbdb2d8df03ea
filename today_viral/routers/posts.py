"""Post, like and comment routes."""
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..clients.auth_provider import Identity
from ..constants import FEED_PAGE_SIZE
from ..database import get_session
from ..models import Profile
from ..schemas import (
    CommentCreate,
    CommentCreatedResponse,
    CommentListResponse,
    CommentResponse,
    PostCreate,
    PostEngagementResponse,
    PostPageResponse,
    PostResponse,
)
from ..services import (
    create_post_comment,
    create_post_record,
    get_current_profile,
    get_optional_identity,
    get_post_record,
    list_feed_page,
    list_post_comments,
    set_post_like_state,
)

router = APIRouter(prefix="/posts", tags=["posts"])


def _viewer_id(identity: Identity | None) -> UUID | None:
    return identity.id if identity is not None else None


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post_endpoint(
    payload: PostCreate,
    db: Session = Depends(get_session),
    current_profile: Profile = Depends(get_current_profile),
) -> PostResponse:
    """Share a TikTok, Instagram, YouTube or Facebook link as a new post."""

    record = create_post_record(db, author=current_profile, payload=payload)
    return PostResponse.model_validate(record)


@router.get("/feed", response_model=PostPageResponse)
async def feed_endpoint(
    page: int = Query(1, ge=1),
    db: Session = Depends(get_session),
    identity: Identity | None = Depends(get_optional_identity),
) -> PostPageResponse:
    items, has_more = list_feed_page(db, page=page, viewer_id=_viewer_id(identity))
    return PostPageResponse(
        items=[PostResponse.model_validate(item) for item in items],
        page=page,
        page_size=FEED_PAGE_SIZE,
        has_more=has_more,
    )


@router.get("/{post_id}", response_model=PostResponse)
async def get_post_endpoint(
    post_id: UUID,
    db: Session = Depends(get_session),
    identity: Identity | None = Depends(get_optional_identity),
) -> PostResponse:
    return PostResponse.model_validate(get_post_record(db, post_id=post_id, viewer_id=_viewer_id(identity)))


@router.post("/{post_id}/likes", response_model=PostEngagementResponse)
async def like_post_endpoint(
    post_id: UUID,
    db: Session = Depends(get_session),
    current_profile: Profile = Depends(get_current_profile),
) -> PostEngagementResponse:
    payload = set_post_like_state(db, post_id=post_id, user_id=current_profile.id, should_like=True)
    return PostEngagementResponse(**payload)


@router.delete("/{post_id}/likes", response_model=PostEngagementResponse)
async def unlike_post_endpoint(
    post_id: UUID,
    db: Session = Depends(get_session),
    current_profile: Profile = Depends(get_current_profile),
) -> PostEngagementResponse:
    payload = set_post_like_state(db, post_id=post_id, user_id=current_profile.id, should_like=False)
    return PostEngagementResponse(**payload)


@router.get("/{post_id}/comments", response_model=CommentListResponse)
async def list_post_comments_endpoint(
    post_id: UUID,
    db: Session = Depends(get_session),
) -> CommentListResponse:
    items = list_post_comments(db, post_id=post_id)
    return CommentListResponse(items=[CommentResponse.model_validate(item) for item in items])


@router.post("/{post_id}/comments", response_model=CommentCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_post_comment_endpoint(
    post_id: UUID,
    payload: CommentCreate,
    db: Session = Depends(get_session),
    current_profile: Profile = Depends(get_current_profile),
) -> CommentCreatedResponse:
    created = create_post_comment(db, post_id=post_id, author=current_profile, content=payload.content)
    return CommentCreatedResponse.model_validate(created)
