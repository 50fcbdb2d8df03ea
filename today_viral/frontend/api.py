"""HTTP client the headless frontend uses to talk to the Today Viral web service."""
from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

import httpx

from ..clients.auth_provider import AuthError
from ..config import get_settings
from ..schemas import (
    AuthResponse,
    CommentCreatedResponse,
    CommentListResponse,
    CommentResponse,
    MeResponse,
    PostEngagementResponse,
    PostListResponse,
    PostPageResponse,
    PostResponse,
    ProfileResponse,
    VideoMetadataResponse,
)

logger = logging.getLogger(__name__)


class BackendError(RuntimeError):
    """Raised when a read or write against the web service fails."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _detail(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text or "Request failed"
    detail = data.get("detail") if isinstance(data, dict) else None
    if isinstance(detail, str) and detail:
        return detail
    # Request validation errors arrive as a list of {"loc", "msg", ...}
    if isinstance(detail, list) and detail and isinstance(detail[0], dict):
        return str(detail[0].get("msg") or "Invalid request")
    return "Request failed"


class ViralApiClient:
    """Thin synchronous wrapper over the REST routes.

    ``http`` may be any ``httpx.Client``; tests pass FastAPI's ``TestClient``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        http: httpx.Client | None = None,
        timeout: float | None = None,
    ) -> None:
        settings = get_settings()
        self._owns_http = http is None
        self._http = http or httpx.Client(
            base_url=base_url or settings.public_base_url,
            timeout=timeout or settings.http_timeout,
        )
        self.access_token: str | None = None

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        auth_call: bool = False,
    ) -> Any:
        headers = {"Authorization": f"Bearer {self.access_token}"} if self.access_token else {}
        try:
            response = self._http.request(method, path, json=json, params=params, headers=headers)
        except httpx.HTTPError as exc:
            logger.exception("%s %s failed", method, path)
            if auth_call:
                raise AuthError("Auth service unavailable", status_code=503) from exc
            raise BackendError("Service unavailable") from exc

        if response.status_code >= 400:
            message = _detail(response)
            if auth_call:
                raise AuthError(message, status_code=response.status_code)
            raise BackendError(message, status_code=response.status_code)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # auth

    def sign_up(
        self,
        email: str,
        password: str,
        *,
        username: str | None = None,
        full_name: str | None = None,
    ) -> AuthResponse:
        payload: dict[str, Any] = {"email": email, "password": password}
        if username:
            payload["username"] = username
        if full_name:
            payload["full_name"] = full_name
        result = AuthResponse.model_validate(self._request("POST", "/auth/sign-up", json=payload, auth_call=True))
        if result.access_token:
            self.access_token = result.access_token
        return result

    def sign_in(self, email: str, password: str) -> AuthResponse:
        data = self._request("POST", "/auth/sign-in", json={"email": email, "password": password}, auth_call=True)
        result = AuthResponse.model_validate(data)
        self.access_token = result.access_token
        return result

    def sign_out(self) -> None:
        try:
            self._request("POST", "/auth/sign-out", auth_call=True)
        finally:
            self.access_token = None

    def me(self) -> MeResponse:
        return MeResponse.model_validate(self._request("GET", "/auth/me", auth_call=True))

    # posts

    def feed_page(self, page: int) -> PostPageResponse:
        return PostPageResponse.model_validate(self._request("GET", "/posts/feed", params={"page": page}))

    def create_post(
        self,
        video_url: str,
        *,
        title: str | None = None,
        description: str | None = None,
        thumbnail_url: str | None = None,
    ) -> PostResponse:
        payload = {
            "video_url": video_url,
            "title": title,
            "description": description,
            "thumbnail_url": thumbnail_url,
        }
        return PostResponse.model_validate(self._request("POST", "/posts", json=payload))

    def like(self, post_id: UUID) -> PostEngagementResponse:
        return PostEngagementResponse.model_validate(self._request("POST", f"/posts/{post_id}/likes"))

    def unlike(self, post_id: UUID) -> PostEngagementResponse:
        return PostEngagementResponse.model_validate(self._request("DELETE", f"/posts/{post_id}/likes"))

    def list_comments(self, post_id: UUID) -> list[CommentResponse]:
        return CommentListResponse.model_validate(self._request("GET", f"/posts/{post_id}/comments")).items

    def add_comment(self, post_id: UUID, content: str) -> CommentCreatedResponse:
        data = self._request("POST", f"/posts/{post_id}/comments", json={"content": content})
        return CommentCreatedResponse.model_validate(data)

    # profiles

    def get_profile(self, user_id: UUID | None = None) -> ProfileResponse:
        path = "/profiles/me" if user_id is None else f"/profiles/{user_id}"
        return ProfileResponse.model_validate(self._request("GET", path))

    def update_profile(
        self,
        *,
        username: str,
        full_name: str | None = None,
        bio: str | None = None,
        website: str | None = None,
    ) -> ProfileResponse:
        payload = {"username": username, "full_name": full_name, "bio": bio, "website": website}
        return ProfileResponse.model_validate(self._request("PUT", "/profiles/me", json=payload))

    def user_posts(self, user_id: UUID) -> list[PostResponse]:
        return PostListResponse.model_validate(self._request("GET", f"/profiles/{user_id}/posts")).items

    def liked_posts(self) -> list[PostResponse]:
        return PostListResponse.model_validate(self._request("GET", "/profiles/me/liked")).items

    # metadata

    def metadata(self, url: str) -> VideoMetadataResponse:
        return VideoMetadataResponse.model_validate(self._request("GET", "/api/metadata", params={"url": url}))


__all__ = ["BackendError", "ViralApiClient"]
