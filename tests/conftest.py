"""Shared fixtures: sqlite database, stub auth provider and API client."""
from __future__ import annotations

import os
import time
from typing import Any, Callable, Iterator
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import delete

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///./test_today_viral.db")
os.environ.setdefault("AUTH_JWT_SECRET", "today-viral-test-secret")
os.environ.setdefault("AUTH_URL", "http://auth.invalid")

from today_viral.clients import AuthError, AuthSessionResult, Identity  # noqa: E402
from today_viral.database import Base, SessionLocal, engine  # noqa: E402
from today_viral.main import app  # noqa: E402
from today_viral.models import Comment, Like, Post, Profile  # noqa: E402
from today_viral.services import set_auth_provider  # noqa: E402

TEST_PASSWORD = "password123"


class StubAuthProvider:
    """In-memory stand-in for the hosted auth API that issues real HS256 session tokens."""

    def __init__(self) -> None:
        self.accounts: dict[str, dict[str, Any]] = {}
        self.signed_out: list[str] = []
        self.require_confirmation = False

    def mint_token(self, identity: Identity, *, audience: str = "authenticated") -> str:
        claims = {
            "sub": str(identity.id),
            "email": identity.email,
            "aud": audience,
            "user_metadata": identity.user_metadata,
            "exp": int(time.time()) + 3600,
        }
        return jwt.encode(claims, os.environ["AUTH_JWT_SECRET"], algorithm="HS256")

    def _session(self, identity: Identity) -> AuthSessionResult:
        return AuthSessionResult(
            identity=identity,
            access_token=self.mint_token(identity),
            refresh_token="refresh-token",
            expires_in=3600,
        )

    async def sign_up(self, email: str, password: str, metadata: dict[str, Any]) -> AuthSessionResult:
        if email in self.accounts:
            raise AuthError("User already registered", status_code=422)
        identity = Identity(id=uuid4(), email=email, user_metadata=dict(metadata))
        self.accounts[email] = {"password": password, "identity": identity}
        if self.require_confirmation:
            return AuthSessionResult(identity=identity)
        return self._session(identity)

    async def sign_in(self, email: str, password: str) -> AuthSessionResult:
        account = self.accounts.get(email)
        if account is None or account["password"] != password:
            raise AuthError("Invalid login credentials", status_code=400)
        return self._session(account["identity"])

    async def sign_out(self, access_token: str) -> None:
        self.signed_out.append(access_token)


@pytest.fixture(scope="module", autouse=True)
def _create_schema() -> Iterator[None]:
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def _clean_database() -> Iterator[None]:
    with SessionLocal() as session:
        session.execute(delete(Comment))
        session.execute(delete(Like))
        session.execute(delete(Post))
        session.execute(delete(Profile))
        session.commit()
    yield


@pytest.fixture(autouse=True)
def auth_provider() -> Iterator[StubAuthProvider]:
    provider = StubAuthProvider()
    set_auth_provider(provider)
    yield provider
    set_auth_provider(None)


@pytest.fixture
def client() -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def register(client: TestClient) -> Callable[..., dict[str, Any]]:
    """Sign up through the API and return the response body (token included)."""

    def _register(email: str, **extra: Any) -> dict[str, Any]:
        response = client.post("/auth/sign-up", json={"email": email, "password": TEST_PASSWORD, **extra})
        assert response.status_code == 201, response.text
        return response.json()

    return _register


@pytest.fixture
def share(client: TestClient) -> Callable[..., dict[str, Any]]:
    def _share(token: str, video_url: str, **extra: Any) -> dict[str, Any]:
        response = client.post("/posts", json={"video_url": video_url, **extra}, headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 201, response.text
        return response.json()

    return _share


@pytest.fixture
def stored_counts() -> Callable[[str], tuple[int, int]]:
    """Count the like and comment rows actually stored for a post."""

    def _counts(post_id: str) -> tuple[int, int]:
        with SessionLocal() as session:
            likes = session.query(Like).filter(Like.post_id == UUID(post_id)).count()
            comments = session.query(Comment).filter(Comment.post_id == UUID(post_id)).count()
        return likes, comments

    return _counts
