"""Authentication backed by the hosted auth provider.

Credentials never touch this service's database: sign-up, sign-in and
sign-out are forwarded to the provider, and the session tokens it issues are
verified locally with the shared JWT secret.
"""
from __future__ import annotations

import logging
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from ..clients.auth_provider import AuthError, AuthProvider, AuthSessionResult, HostedAuthProvider, Identity
from ..database import get_session
from ..models import Profile
from ..schemas import SignUpRequest
from ..security.session_tokens import InvalidSessionToken, verify_session_token
from .profile_service import (
    available_username,
    derive_username,
    email_local_part,
    ensure_profile,
    username_taken,
)

logger = logging.getLogger(__name__)

_security = HTTPBearer(auto_error=False)

_auth_provider: AuthProvider | None = None


def set_auth_provider(provider: AuthProvider | None) -> None:
    """Override the auth provider (useful for tests)."""

    global _auth_provider
    _auth_provider = provider


def get_auth_provider() -> AuthProvider:
    global _auth_provider
    if _auth_provider is None:
        _auth_provider = HostedAuthProvider()
    return _auth_provider


def decode_access_token(token: str) -> Identity:
    """Verify a provider-issued session token and return the identity it carries."""

    try:
        payload = verify_session_token(token)
    except InvalidSessionToken as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc

    try:
        user_id = UUID(str(payload["sub"]))
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token payload") from exc

    metadata = payload.get("user_metadata")
    return Identity(
        id=user_id,
        email=payload.get("email"),
        user_metadata=dict(metadata) if isinstance(metadata, dict) else {},
    )


def _bearer_token(credentials: HTTPAuthorizationCredentials | None) -> str | None:
    if not credentials or credentials.scheme.lower() != "bearer":
        return None
    return credentials.credentials


async def get_access_token(credentials: HTTPAuthorizationCredentials | None = Depends(_security)) -> str:
    token = _bearer_token(credentials)
    if token is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing bearer token")
    return token


async def get_current_identity(token: str = Depends(get_access_token)) -> Identity:
    """Resolve the authenticated identity from the provided bearer token."""

    return decode_access_token(token)


async def get_optional_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(_security),
) -> Identity | None:
    """Return the identity when a valid bearer token is provided."""

    token = _bearer_token(credentials)
    if token is None:
        return None
    try:
        return decode_access_token(token)
    except HTTPException:
        return None


async def get_current_profile(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_session),
) -> Profile:
    """Resolve the caller's profile, provisioning it on first use."""

    return ensure_profile(db, identity)


async def sign_up(db: Session, payload: SignUpRequest) -> tuple[AuthSessionResult, Profile | None]:
    """Create an identity with the provider and provision its profile when a session is issued."""

    email = str(payload.email)
    if payload.username:
        if username_taken(db, payload.username):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already in use")
        username = payload.username
    else:
        username = available_username(db, derive_username(email))
    full_name = payload.full_name or email_local_part(email)

    try:
        result = await get_auth_provider().sign_up(
            email,
            payload.password,
            {"username": username, "full_name": full_name},
        )
    except AuthError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc

    profile: Profile | None = None
    if result.access_token:
        profile = ensure_profile(db, result.identity)
    else:
        logger.info("Sign-up for %s awaiting e-mail confirmation", result.identity.id)
    return result, profile


async def sign_in(db: Session, email: str, password: str) -> tuple[AuthSessionResult, Profile]:
    try:
        result = await get_auth_provider().sign_in(email, password)
    except AuthError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc
    return result, ensure_profile(db, result.identity)


async def sign_out(access_token: str) -> None:
    try:
        await get_auth_provider().sign_out(access_token)
    except AuthError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc


__all__ = [
    "decode_access_token",
    "get_access_token",
    "get_auth_provider",
    "get_current_identity",
    "get_current_profile",
    "get_optional_identity",
    "set_auth_provider",
    "sign_in",
    "sign_out",
    "sign_up",
]
