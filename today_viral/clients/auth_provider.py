"""Client for the hosted auth subsystem (GoTrue-compatible REST API)."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol
from uuid import UUID

import httpx

from ..config import get_settings

logger = logging.getLogger(__name__)


class AuthError(RuntimeError):
    """Raised when the auth provider rejects credentials or a request fails."""

    def __init__(self, message: str, *, status_code: int = 400) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@dataclass(frozen=True, slots=True)
class Identity:
    """Authenticated identity as issued by the hosted auth provider."""

    id: UUID
    email: str | None = None
    user_metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class AuthSessionResult:
    """Outcome of a sign-up or sign-in call.

    ``access_token`` is ``None`` when the provider created the identity but is
    waiting for e-mail confirmation before issuing a session.
    """

    identity: Identity
    access_token: str | None = None
    refresh_token: str | None = None
    expires_in: int | None = None


class AuthProvider(Protocol):
    async def sign_up(self, email: str, password: str, metadata: dict[str, Any]) -> AuthSessionResult: ...

    async def sign_in(self, email: str, password: str) -> AuthSessionResult: ...

    async def sign_out(self, access_token: str) -> None: ...


def _identity_from_user(payload: dict[str, Any]) -> Identity:
    try:
        user_id = UUID(str(payload["id"]))
    except (KeyError, ValueError) as exc:
        raise AuthError("Auth provider returned an invalid user", status_code=502) from exc
    metadata = payload.get("user_metadata") or {}
    return Identity(id=user_id, email=payload.get("email"), user_metadata=dict(metadata))


def _session_from_payload(payload: dict[str, Any]) -> AuthSessionResult:
    # Sign-up responses carry either a full session or the bare user object.
    user = payload.get("user") if isinstance(payload.get("user"), dict) else payload
    return AuthSessionResult(
        identity=_identity_from_user(user),
        access_token=payload.get("access_token"),
        refresh_token=payload.get("refresh_token"),
        expires_in=payload.get("expires_in"),
    )


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text or "Authentication failed"
    if isinstance(data, dict):
        for key in ("error_description", "msg", "message", "error"):
            value = data.get(key)
            if isinstance(value, str) and value:
                return value
    return "Authentication failed"


class HostedAuthProvider:
    """Forward sign-up, sign-in and sign-out to the hosted auth REST API."""

    def __init__(
        self,
        *,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self.base_url = (base_url or settings.auth_url).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.auth_api_key
        self.timeout = timeout or settings.http_timeout
        self._transport = transport

    def _headers(self, access_token: str | None = None) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["apikey"] = self.api_key
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        return headers

    async def _post(
        self,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
        access_token: str | None = None,
    ) -> httpx.Response:
        url = f"{self.base_url}/auth/v1/{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(url, json=json, params=params, headers=self._headers(access_token))
        except httpx.HTTPError as exc:
            logger.exception("Auth provider request to %s failed", path)
            raise AuthError("Auth service unavailable", status_code=503) from exc

        if response.status_code >= 400:
            message = _error_message(response)
            logger.info("Auth provider rejected %s (%s): %s", path, response.status_code, message)
            status_code = response.status_code if response.status_code < 500 else 502
            raise AuthError(message, status_code=status_code)
        return response

    async def sign_up(self, email: str, password: str, metadata: dict[str, Any]) -> AuthSessionResult:
        response = await self._post("signup", json={"email": email, "password": password, "data": metadata})
        return _session_from_payload(response.json())

    async def sign_in(self, email: str, password: str) -> AuthSessionResult:
        response = await self._post(
            "token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        result = _session_from_payload(response.json())
        if not result.access_token:
            raise AuthError("Auth provider did not issue a session", status_code=502)
        return result

    async def sign_out(self, access_token: str) -> None:
        await self._post("logout", access_token=access_token)


__all__ = [
    "AuthError",
    "AuthProvider",
    "AuthSessionResult",
    "HostedAuthProvider",
    "Identity",
]
