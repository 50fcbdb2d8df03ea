"""Business logic for reading, provisioning and editing profiles."""
from __future__ import annotations

import logging
import re
from typing import Any
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..clients.auth_provider import Identity
from ..constants import USERNAME_MAX_LENGTH
from ..models import Profile
from ..schemas import ProfileUpdateRequest

logger = logging.getLogger(__name__)

_USERNAME_INVALID_CHARS = re.compile(r"[^A-Za-z0-9_]")
_FALLBACK_USERNAME = "user"


def email_local_part(email: str | None) -> str:
    return (email or "").split("@", 1)[0].strip()


def sanitize_username(value: str) -> str:
    return _USERNAME_INVALID_CHARS.sub("_", value.strip())[:USERNAME_MAX_LENGTH]


def derive_username(email: str | None) -> str:
    """Default username for an identity that did not pick one: the e-mail local part."""

    return sanitize_username(email_local_part(email)) or _FALLBACK_USERNAME


def username_taken(db: Session, username: str, *, exclude_id: UUID | None = None) -> bool:
    stmt = select(Profile.id).where(Profile.username == username)
    if exclude_id is not None:
        stmt = stmt.where(Profile.id != exclude_id)
    return db.scalar(stmt.limit(1)) is not None


def available_username(db: Session, base: str) -> str:
    """Return ``base`` or ``base_<n>`` for the first ``n`` not already in use."""

    if not username_taken(db, base):
        return base
    suffix = 1
    while True:
        tail = f"_{suffix}"
        candidate = base[: USERNAME_MAX_LENGTH - len(tail)] + tail
        if not username_taken(db, candidate):
            return candidate
        suffix += 1


def profile_seed(identity: Identity) -> dict[str, Any]:
    """Username and full name for a new profile, defaulting to the e-mail local part."""

    metadata = identity.user_metadata or {}
    username = metadata.get("username")
    # Metadata comes from the auth provider unchecked.
    username = sanitize_username(username) if isinstance(username, str) else ""
    if not username:
        username = derive_username(identity.email)
    full_name = metadata.get("full_name")
    if not isinstance(full_name, str) or not full_name.strip():
        full_name = email_local_part(identity.email) or None
    return {"username": username.strip(), "full_name": full_name}


def get_profile(db: Session, user_id: UUID) -> Profile:
    profile = db.get(Profile, user_id)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    return profile


def ensure_profile(db: Session, identity: Identity) -> Profile:
    """Return the identity's profile, creating it on first use."""

    existing = db.get(Profile, identity.id)
    if existing is not None:
        return existing

    seed = profile_seed(identity)
    profile = Profile(
        id=identity.id,
        username=available_username(db, seed["username"]),
        full_name=seed["full_name"],
    )
    db.add(profile)
    try:
        db.commit()
    except IntegrityError:
        # Another request provisioned the same identity concurrently.
        db.rollback()
        existing = db.get(Profile, identity.id)
        if existing is not None:
            return existing
        logger.exception("Failed to provision profile for %s", identity.id)
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already in use")
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to provision profile for %s", identity.id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create profile",
        ) from exc

    db.refresh(profile)
    logger.info("Provisioned profile %s for %s", profile.username, identity.id)
    return profile


def update_profile(db: Session, *, user_id: UUID, payload: ProfileUpdateRequest) -> Profile:
    """Replace the editable fields of ``user_id``'s profile."""

    profile = get_profile(db, user_id)

    if username_taken(db, payload.username, exclude_id=user_id):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already in use")

    profile.username = payload.username
    profile.full_name = payload.full_name
    profile.bio = payload.bio
    profile.website = str(payload.website) if payload.website is not None else None

    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already in use") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update profile",
        ) from exc

    db.refresh(profile)
    return profile


__all__ = [
    "available_username",
    "derive_username",
    "email_local_part",
    "ensure_profile",
    "get_profile",
    "profile_seed",
    "sanitize_username",
    "update_profile",
    "username_taken",
]
