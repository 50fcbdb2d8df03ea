"""Tests for the composer and profile view driving the real API."""
from __future__ import annotations

from types import SimpleNamespace
from uuid import UUID

import pytest

from today_viral.frontend import AuthSession, Composer, ProfileView, SignInRequired, ViralApiClient
from today_viral.platforms import INVALID_URL_MESSAGE, UNSUPPORTED_PLATFORM_MESSAGE, Platform


@pytest.fixture
def session(client):
    return AuthSession(ViralApiClient(http=client))


class _RecordingApi:
    def __init__(self) -> None:
        self.created = []

    def create_post(self, video_url, **fields):
        self.created.append(video_url)
        raise AssertionError("create_post should not be called")


def test_detect_mirrors_server_validation() -> None:
    composer = Composer(_RecordingApi(), SimpleNamespace())

    assert composer.detect("https://youtu.be/abc").platform is Platform.YOUTUBE
    assert composer.error is None

    assert composer.detect("nope") is None
    assert composer.error == INVALID_URL_MESSAGE

    assert composer.detect("https://vimeo.com/1") is None
    assert composer.error == UNSUPPORTED_PLATFORM_MESSAGE


def test_submit_requires_identity(session) -> None:
    composer = Composer(session.api, session)
    with pytest.raises(SignInRequired):
        composer.submit("https://youtu.be/abc")


def test_submit_validates_before_calling_backend() -> None:
    api = _RecordingApi()
    signed_in = SimpleNamespace(require_identity=lambda: object())
    composer = Composer(api, signed_in)

    assert composer.submit("https://vimeo.com/1") is None
    assert composer.error == UNSUPPORTED_PLATFORM_MESSAGE
    assert api.created == []


def test_share_then_profile_stats(client, session) -> None:
    session.sign_up("maker@example.com", "password123")
    composer = Composer(session.api, session)

    first = composer.submit("https://youtu.be/abc", title="Surf")
    second = composer.submit("https://www.tiktok.com/@u/video/7")
    assert first.title == "Surf"
    assert first.platform is Platform.YOUTUBE
    assert second.title == "Video from TikTok"

    session.api.like(first.id)
    session.api.add_comment(first.id, "wow")
    session.api.add_comment(second.id, "nice")

    view = ProfileView(session.api, session)
    assert view.load() is True
    assert view.profile.username == "maker"
    assert view.stats.posts == 2
    assert view.stats.likes == 1
    assert view.stats.comments == 2
    assert [post.id for post in view.liked_posts] == [first.id]


def test_profile_save_and_sign_out(client, session, register) -> None:
    register("taken@example.com", username="taken_name")
    session.sign_up("editor@example.com", "password123")
    view = ProfileView(session.api, session)
    view.load()

    assert view.save(username="taken_name") is False
    assert view.error == "Username already in use"

    assert view.save(username="new_name", bio="Hello") is True
    assert view.profile.username == "new_name"
    assert session.user.profile.username == "new_name"

    assert view.sign_out() == "/"
    assert session.user is None
    with pytest.raises(SignInRequired):
        view.load()


def test_public_profile_loads_without_identity(client, session, register) -> None:
    author = register("author@example.com")
    view = ProfileView(session.api, session, user_id=UUID(author["user_id"]))

    assert view.load() is True
    assert view.profile.username == "author"
    assert view.liked_posts == []
