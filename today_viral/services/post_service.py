"""Business logic for posts, likes and comments."""
from __future__ import annotations

import logging
from typing import Any, Iterable, Sequence
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from ..constants import FEED_PAGE_SIZE
from ..models import Comment, Like, Post, Profile
from ..platforms import (
    InvalidUrlError,
    UnsupportedPlatformError,
    classify,
    default_description,
    default_thumbnail_url,
    default_title,
)
from ..schemas import PostCreate

logger = logging.getLogger(__name__)


def _author_summary(profile: Profile | None) -> dict[str, Any] | None:
    if profile is None:
        return None
    return {
        "username": profile.username,
        "full_name": profile.full_name,
        "avatar_url": profile.avatar_url,
    }


def _serialize_post(post: Post, viewer_likes: dict[UUID, Like]) -> dict[str, Any]:
    like = viewer_likes.get(post.id)
    return {
        "id": post.id,
        "user_id": post.user_id,
        "title": post.title,
        "description": post.description,
        "video_url": post.video_url,
        "platform": post.platform,
        "thumbnail_url": post.thumbnail_url,
        "likes_count": int(post.likes_count or 0),
        "comments_count": int(post.comments_count or 0),
        "created_at": post.created_at,
        "author": _author_summary(post.author),
        "likes": [{"id": like.id, "user_id": like.user_id}] if like is not None else [],
        "viewer_has_liked": like is not None,
    }


def _viewer_likes(db: Session, viewer_id: UUID | None, post_ids: Iterable[UUID]) -> dict[UUID, Like]:
    ids = list(post_ids)
    if viewer_id is None or not ids:
        return {}
    rows = db.scalars(select(Like).where(Like.user_id == viewer_id, Like.post_id.in_(ids))).all()
    return {like.post_id: like for like in rows}


def _serialize_posts(db: Session, posts: Sequence[Post], viewer_id: UUID | None) -> list[dict[str, Any]]:
    viewer_likes = _viewer_likes(db, viewer_id, (post.id for post in posts))
    return [_serialize_post(post, viewer_likes) for post in posts]


def _get_post_or_404(db: Session, post_id: UUID) -> Post:
    post = db.get(Post, post_id)
    if post is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return post


def create_post_record(db: Session, *, author: Profile, payload: PostCreate) -> dict[str, Any]:
    """Validate the shared link and persist a new post for ``author``."""

    try:
        match = classify(payload.video_url)
    except (InvalidUrlError, UnsupportedPlatformError) as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc

    title = (payload.title or "").strip() or default_title(match.platform)
    description = (payload.description or "").strip() or default_description(match.platform)
    thumbnail_url = (payload.thumbnail_url or "").strip() or default_thumbnail_url(match)

    post = Post(
        user_id=author.id,
        title=title,
        description=description,
        video_url=payload.video_url.strip(),
        platform=match.platform.value,
        thumbnail_url=thumbnail_url,
    )
    db.add(post)
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to create post for %s", author.id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create post") from exc

    db.refresh(post)
    logger.info("Created %s post %s for %s", match.platform.value, post.id, author.id)
    return _serialize_post(post, {})


def get_post_record(db: Session, *, post_id: UUID, viewer_id: UUID | None = None) -> dict[str, Any]:
    post = _get_post_or_404(db, post_id)
    return _serialize_posts(db, [post], viewer_id)[0]


def list_feed_page(
    db: Session,
    *,
    page: int,
    viewer_id: UUID | None = None,
    page_size: int = FEED_PAGE_SIZE,
) -> tuple[list[dict[str, Any]], bool]:
    """Return one window of the reverse-chronological feed and whether more may follow.

    ``has_more`` is false exactly when the window holds fewer than ``page_size`` rows.
    """

    if page < 1:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="page must be >= 1")

    offset = (page - 1) * page_size
    stmt = (
        select(Post)
        .options(selectinload(Post.author))
        .order_by(Post.created_at.desc(), Post.id.desc())
        .offset(offset)
        .limit(page_size)
    )
    posts = db.scalars(stmt).all()
    return _serialize_posts(db, posts, viewer_id), len(posts) >= page_size


def list_posts_by_user(db: Session, *, author_id: UUID, viewer_id: UUID | None = None) -> list[dict[str, Any]]:
    stmt = (
        select(Post)
        .options(selectinload(Post.author))
        .where(Post.user_id == author_id)
        .order_by(Post.created_at.desc(), Post.id.desc())
    )
    return _serialize_posts(db, db.scalars(stmt).all(), viewer_id)


def list_liked_posts(db: Session, *, user_id: UUID) -> list[dict[str, Any]]:
    """Posts ``user_id`` has liked, most recently liked first."""

    stmt = (
        select(Post)
        .join(Like, Like.post_id == Post.id)
        .options(selectinload(Post.author))
        .where(Like.user_id == user_id)
        .order_by(Like.created_at.desc())
    )
    return _serialize_posts(db, db.scalars(stmt).all(), user_id)


def _recount(db: Session, post: Post) -> None:
    post.likes_count = db.scalar(select(func.count(Like.id)).where(Like.post_id == post.id)) or 0
    post.comments_count = db.scalar(select(func.count(Comment.id)).where(Comment.post_id == post.id)) or 0


def get_post_engagement_snapshot(db: Session, *, post_id: UUID, viewer_id: UUID | None) -> dict[str, Any]:
    post = _get_post_or_404(db, post_id)
    viewer_has_liked = False
    if viewer_id is not None:
        viewer_has_liked = (
            db.scalar(select(Like.id).where(Like.post_id == post_id, Like.user_id == viewer_id).limit(1))
            is not None
        )
    return {
        "post_id": post.id,
        "likes_count": int(post.likes_count or 0),
        "comments_count": int(post.comments_count or 0),
        "viewer_has_liked": viewer_has_liked,
    }


def set_post_like_state(
    db: Session,
    *,
    post_id: UUID,
    user_id: UUID,
    should_like: bool,
) -> dict[str, Any]:
    """Insert or delete the caller's like and recount ``likes_count`` in the same transaction."""

    post = _get_post_or_404(db, post_id)
    existing = db.scalar(select(Like).where(Like.post_id == post_id, Like.user_id == user_id))

    try:
        if should_like and existing is None:
            db.add(Like(post_id=post_id, user_id=user_id))
            db.flush()
        elif not should_like and existing is not None:
            db.delete(existing)
            db.flush()
        _recount(db, post)
        db.commit()
    except IntegrityError:
        # A concurrent request inserted the same (post, user) like first.
        db.rollback()
        logger.info("Duplicate like for post %s by %s ignored", post_id, user_id)
    except SQLAlchemyError as exc:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update like") from exc

    db.refresh(post)
    return get_post_engagement_snapshot(db, post_id=post_id, viewer_id=user_id)


def _serialize_comment(comment: Comment) -> dict[str, Any]:
    return {
        "id": comment.id,
        "post_id": comment.post_id,
        "user_id": comment.user_id,
        "content": comment.content,
        "created_at": comment.created_at,
        "author": _author_summary(comment.user),
    }


def list_post_comments(db: Session, *, post_id: UUID) -> list[dict[str, Any]]:
    _get_post_or_404(db, post_id)
    stmt = (
        select(Comment)
        .options(selectinload(Comment.user))
        .where(Comment.post_id == post_id)
        .order_by(Comment.created_at.asc(), Comment.id.asc())
    )
    return [_serialize_comment(comment) for comment in db.scalars(stmt).all()]


def create_post_comment(
    db: Session,
    *,
    post_id: UUID,
    author: Profile,
    content: str,
) -> dict[str, Any]:
    """Append a comment and return it together with the recounted ``comments_count``."""

    post = _get_post_or_404(db, post_id)
    text = (content or "").strip()
    if not text:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="Comment cannot be empty")

    comment = Comment(post_id=post.id, user_id=author.id, content=text)
    db.add(comment)
    try:
        db.flush()
        _recount(db, post)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to add comment") from exc

    db.refresh(comment)
    db.refresh(post)
    return {"comment": _serialize_comment(comment), "comments_count": int(post.comments_count or 0)}


__all__ = [
    "create_post_comment",
    "create_post_record",
    "get_post_engagement_snapshot",
    "get_post_record",
    "list_feed_page",
    "list_liked_posts",
    "list_post_comments",
    "list_posts_by_user",
    "set_post_like_state",
]
