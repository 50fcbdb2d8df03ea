"""Verify session tokens issued by the hosted auth service."""
from __future__ import annotations

import os
from functools import lru_cache
from typing import Any, Final

from jose import JWTError, jwt

from ..config import get_settings

JWT_SECRET_ENV: Final = "AUTH_JWT_SECRET"

# Sample values shipped in the hosted service's docs and local templates.
_PLACEHOLDER_SECRETS: Final[frozenset[str]] = frozenset(
    {
        "changeme",
        "placeholder",
        "your-jwt-secret",
        "super-secret-jwt-token-with-at-least-32-characters-long",
    }
)


class MissingSecretError(RuntimeError):
    """Raised when the JWT secret is unset or still a sample value."""


class InvalidSessionToken(ValueError):
    """Raised when a bearer token fails signature, audience or expiry checks."""


def is_placeholder(value: str | None) -> bool:
    return not value or not value.strip() or value.strip().lower() in _PLACEHOLDER_SECRETS


@lru_cache(maxsize=1)
def jwt_secret() -> str:
    value = os.getenv(JWT_SECRET_ENV)
    if is_placeholder(value):
        raise MissingSecretError(f"{JWT_SECRET_ENV} must be set to the auth service's JWT secret")
    return value.strip()


def verify_session_token(token: str) -> dict[str, Any]:
    """Return the verified claims of ``token``; a missing ``sub`` counts as invalid."""

    settings = get_settings()
    try:
        claims = jwt.decode(
            token,
            jwt_secret(),
            algorithms=[settings.auth_jwt_algorithm],
            audience=settings.auth_jwt_audience,
        )
    except JWTError as exc:
        raise InvalidSessionToken("Invalid token") from exc

    if not claims.get("sub"):
        raise InvalidSessionToken("Invalid token payload")
    return claims


__all__ = [
    "InvalidSessionToken",
    "MissingSecretError",
    "is_placeholder",
    "jwt_secret",
    "verify_session_token",
]
