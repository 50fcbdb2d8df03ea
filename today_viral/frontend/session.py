"""Client-side auth session: the explicit context object views subscribe to."""
from __future__ import annotations

import logging
from enum import Enum
from typing import Callable
from uuid import UUID

from ..clients.auth_provider import AuthError
from ..constants import SIGN_IN_ROUTE
from ..schemas import AuthResponse, MeResponse, ProfileResponse
from .api import ViralApiClient

logger = logging.getLogger(__name__)

Listener = Callable[[MeResponse | None], None]


class SessionState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"


class SignInRequired(RuntimeError):
    """Raised by authenticated-only views when no identity is present."""

    def __init__(self, redirect_to: str = SIGN_IN_ROUTE) -> None:
        super().__init__(f"Sign in required; redirect to {redirect_to}")
        self.redirect_to = redirect_to


class AuthSession:
    """Holds the current identity and drives sign-in, sign-up and sign-out.

    Call :meth:`start` once at startup to restore a stored session token and
    :meth:`close` on teardown.
    """

    def __init__(self, api: ViralApiClient) -> None:
        self.api = api
        self.state = SessionState.UNAUTHENTICATED
        self.user: MeResponse | None = None
        self.error: str | None = None
        self._listeners: list[Listener] = []

    @property
    def user_id(self) -> UUID | None:
        return self.user.user_id if self.user is not None else None

    @property
    def is_authenticated(self) -> bool:
        return self.state is SessionState.AUTHENTICATED

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for identity changes; returns the unsubscribe callable."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self.user)

    def _set_user(self, user: MeResponse | None) -> None:
        self.user = user
        self.state = SessionState.AUTHENTICATED if user is not None else SessionState.UNAUTHENTICATED
        self._notify()

    def _user_from(self, result: AuthResponse) -> MeResponse:
        if result.profile is None:
            return self.api.me()
        return MeResponse(user_id=result.user_id, email=result.email, profile=result.profile)

    def start(self, access_token: str | None = None) -> MeResponse | None:
        """Restore a session from a stored token; an invalid token leaves the session signed out."""

        if not access_token:
            self._set_user(None)
            return None

        self.state = SessionState.AUTHENTICATING
        self.api.access_token = access_token
        try:
            user = self.api.me()
        except AuthError as exc:
            logger.info("Stored session rejected: %s", exc.message)
            self.api.access_token = None
            self._set_user(None)
            return None
        self._set_user(user)
        return user

    def sign_in(self, email: str, password: str) -> MeResponse:
        previous = self.state
        previous_token = self.api.access_token
        self.state = SessionState.AUTHENTICATING
        self.error = None
        try:
            result = self.api.sign_in(email, password)
            user = self._user_from(result)
        except AuthError as exc:
            logger.info("Sign-in failed: %s", exc.message)
            self.state = previous
            self.error = exc.message
            self.api.access_token = previous_token
            raise
        logger.info("Signed in as %s", user.user_id)
        self._set_user(user)
        return user

    def sign_up(
        self,
        email: str,
        password: str,
        *,
        username: str | None = None,
        full_name: str | None = None,
    ) -> AuthResponse:
        """Create an account; the session stays signed out while e-mail confirmation is pending."""

        previous = self.state
        previous_token = self.api.access_token
        self.state = SessionState.AUTHENTICATING
        self.error = None
        try:
            result = self.api.sign_up(email, password, username=username, full_name=full_name)
            user = self._user_from(result) if result.access_token else None
        except AuthError as exc:
            logger.info("Sign-up failed: %s", exc.message)
            self.state = previous
            self.error = exc.message
            self.api.access_token = previous_token
            raise

        if user is None:
            self.state = previous
            return result
        self._set_user(user)
        return result

    def sign_out(self) -> None:
        if self.api.access_token:
            try:
                self.api.sign_out()
            except AuthError as exc:
                # The local session is cleared regardless.
                logger.warning("Remote sign-out failed: %s", exc.message)
        self.api.access_token = None
        self._set_user(None)

    def replace_profile(self, profile: ProfileResponse) -> None:
        if self.user is None:
            return
        self.user = self.user.model_copy(update={"profile": profile})
        self._notify()

    def require_identity(self) -> MeResponse:
        if self.user is None:
            raise SignInRequired()
        return self.user

    def close(self) -> None:
        self._listeners.clear()
        self.api.close()


__all__ = ["AuthSession", "SessionState", "SignInRequired"]
