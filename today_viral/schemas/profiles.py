"""Schemas for profile endpoints."""
from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator

from ..constants import USERNAME_MAX_LENGTH, USERNAME_MIN_LENGTH, USERNAME_PATTERN


class ProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    full_name: str | None = None
    bio: str | None = None
    website: str | None = None
    avatar_url: str | None = None
    created_at: datetime


class ProfileUpdateRequest(BaseModel):
    """Editable profile fields; a save replaces all of them."""

    username: str = Field(
        ...,
        min_length=USERNAME_MIN_LENGTH,
        max_length=USERNAME_MAX_LENGTH,
        pattern=USERNAME_PATTERN,
    )
    full_name: str | None = Field(default=None, max_length=255)
    bio: str | None = Field(default=None, max_length=500)
    website: HttpUrl | None = None

    @field_validator("full_name", "bio", "website", mode="before")
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


__all__ = ["ProfileResponse", "ProfileUpdateRequest"]
