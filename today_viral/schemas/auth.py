"""Pydantic schemas for authentication endpoints."""
from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from ..constants import USERNAME_MAX_LENGTH, USERNAME_MIN_LENGTH, USERNAME_PATTERN
from .profiles import ProfileResponse


class SignUpRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    username: str | None = Field(
        default=None,
        min_length=USERNAME_MIN_LENGTH,
        max_length=USERNAME_MAX_LENGTH,
        pattern=USERNAME_PATTERN,
    )
    full_name: str | None = Field(default=None, max_length=255)


class SignInRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class AuthResponse(BaseModel):
    user_id: UUID
    email: str | None = None
    access_token: str | None = None
    refresh_token: str | None = None
    expires_in: int | None = None
    token_type: str = "bearer"
    confirmation_required: bool = False
    profile: ProfileResponse | None = None


class MeResponse(BaseModel):
    user_id: UUID
    email: str | None = None
    profile: ProfileResponse


__all__ = ["AuthResponse", "MeResponse", "SignInRequest", "SignUpRequest"]
