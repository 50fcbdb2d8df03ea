"""Tests for the client-side auth session driving the real API."""
from __future__ import annotations

import pytest

from today_viral.clients import AuthError
from today_viral.frontend import AuthSession, SessionState, SignInRequired, ViralApiClient


@pytest.fixture
def session(client):
    auth_session = AuthSession(ViralApiClient(http=client))
    yield auth_session
    auth_session.close()


def test_start_without_token_stays_signed_out(session) -> None:
    assert session.start() is None
    assert session.state is SessionState.UNAUTHENTICATED
    with pytest.raises(SignInRequired) as excinfo:
        session.require_identity()
    assert excinfo.value.redirect_to == "/auth"


def test_start_with_rejected_token_clears_it(session) -> None:
    assert session.start("stale-token") is None
    assert session.state is SessionState.UNAUTHENTICATED
    assert session.api.access_token is None


def test_sign_up_authenticates_and_notifies(session) -> None:
    seen = []
    session.subscribe(seen.append)

    result = session.sign_up("a@b.com", "password123")

    assert result.access_token
    assert session.state is SessionState.AUTHENTICATED
    assert session.require_identity().profile.username == "a"
    assert len(seen) == 1
    assert seen[0].email == "a@b.com"


def test_sign_up_pending_confirmation_stays_signed_out(session, auth_provider) -> None:
    auth_provider.require_confirmation = True

    result = session.sign_up("wait@example.com", "password123")

    assert result.confirmation_required is True
    assert session.state is SessionState.UNAUTHENTICATED
    assert session.user is None


def test_failed_sign_in_keeps_prior_state(session) -> None:
    session.sign_up("viewer@example.com", "password123")
    session.sign_out()
    seen = []
    session.subscribe(seen.append)

    with pytest.raises(AuthError):
        session.sign_in("viewer@example.com", "wrong-password")

    assert session.state is SessionState.UNAUTHENTICATED
    assert session.error == "Invalid login credentials"
    assert session.api.access_token is None
    assert seen == []


def test_sign_in_then_restore_from_token(client, session) -> None:
    session.sign_up("viewer@example.com", "password123")
    session.sign_out()

    user = session.sign_in("viewer@example.com", "password123")
    assert session.is_authenticated
    assert user.profile.username == "viewer"

    restored = AuthSession(ViralApiClient(http=client))
    assert restored.start(session.api.access_token).user_id == user.user_id
    assert restored.state is SessionState.AUTHENTICATED


def test_sign_out_clears_identity(session, auth_provider) -> None:
    session.sign_up("leaver@example.com", "password123")
    token = session.api.access_token
    seen = []
    unsubscribe = session.subscribe(seen.append)

    session.sign_out()

    assert session.state is SessionState.UNAUTHENTICATED
    assert session.user is None
    assert auth_provider.signed_out == [token]
    assert seen == [None]

    unsubscribe()
    session.sign_in("leaver@example.com", "password123")
    assert seen == [None]
