"""Tests for video card playback, likes and comments."""
from __future__ import annotations

from datetime import datetime, timezone
from types import SimpleNamespace
from uuid import UUID, uuid4

import pytest

from today_viral.frontend import BackendError, FeedState, VideoCard
from today_viral.schemas import (
    CommentCreatedResponse,
    CommentResponse,
    LikeSummary,
    PostEngagementResponse,
    PostResponse,
)

VIEWER = uuid4()


def _post(**fields) -> PostResponse:
    values = {
        "id": uuid4(),
        "user_id": uuid4(),
        "title": "Clip",
        "video_url": "https://www.tiktok.com/@u/video/1",
        "platform": "tiktok",
        "created_at": datetime.now(timezone.utc),
    }
    values.update(fields)
    return PostResponse(**values)


def _comment(post_id: UUID, content: str) -> CommentResponse:
    return CommentResponse(
        id=uuid4(),
        post_id=post_id,
        user_id=VIEWER,
        content=content,
        created_at=datetime.now(timezone.utc),
    )


class FakeApi:
    def __init__(self) -> None:
        self.calls: list[tuple[str, UUID]] = []
        self.fail = False
        self.likes_count_from_server: int | None = None
        self.comments: list[CommentResponse] = []
        self.on_like = None

    def _record(self, name: str, post_id: UUID) -> None:
        self.calls.append((name, post_id))
        if self.fail:
            raise BackendError("Backend unavailable", status_code=500)

    def like(self, post_id: UUID) -> PostEngagementResponse:
        self._record("like", post_id)
        if self.on_like is not None:
            self.on_like()
        return PostEngagementResponse(
            post_id=post_id,
            likes_count=self.likes_count_from_server or 1,
            comments_count=0,
            viewer_has_liked=True,
        )

    def unlike(self, post_id: UUID) -> PostEngagementResponse:
        self._record("unlike", post_id)
        return PostEngagementResponse(post_id=post_id, likes_count=0, comments_count=0, viewer_has_liked=False)

    def list_comments(self, post_id: UUID) -> list[CommentResponse]:
        self._record("list_comments", post_id)
        return list(self.comments)

    def add_comment(self, post_id: UUID, content: str) -> CommentCreatedResponse:
        self._record("add_comment", post_id)
        return CommentCreatedResponse(comment=_comment(post_id, content), comments_count=len(self.comments) + 1)


@pytest.fixture
def api() -> FakeApi:
    return FakeApi()


def _wired(api: FakeApi, post: PostResponse, *, viewer: UUID | None = VIEWER) -> tuple[FeedState, VideoCard]:
    session = SimpleNamespace(user_id=viewer)
    feed = FeedState(api, session)
    feed.posts = [post]
    return feed, feed.card_for(post)


def test_membership_is_derived_from_embedded_likes(api) -> None:
    liked = _post(likes=[LikeSummary(id=uuid4(), user_id=VIEWER)], likes_count=1)
    other = _post(likes=[LikeSummary(id=uuid4(), user_id=uuid4())], likes_count=1)

    assert _wired(api, liked)[1].is_liked is True
    assert _wired(api, other)[1].is_liked is False
    assert _wired(api, liked, viewer=None)[1].is_liked is False


def test_playback_follows_visibility_with_manual_override(api) -> None:
    card = VideoCard(api, SimpleNamespace(user_id=None), _post())
    assert card.muted is True
    assert card.playing is False

    card.on_visibility_change(0.6)
    assert card.playing is True

    card.toggle_play()
    card.on_visibility_change(0.9)
    assert card.playing is False

    card.on_visibility_change(0.3)
    assert card.playing is False
    card.toggle_play()
    card.on_visibility_change(0.49)
    assert card.playing is True

    card.on_visibility_change(0.5)
    assert card.playing is True

    card.toggle_mute()
    assert card.muted is False


def test_like_reconciles_with_server_counts(api) -> None:
    post = _post(likes_count=4)
    feed, card = _wired(api, post)
    api.likes_count_from_server = 7

    assert card.toggle_like() is True

    assert card.is_liked is True
    assert card.post.likes_count == 7
    assert feed.posts[0].likes_count == 7
    assert feed.posts[0].viewer_has_liked is True
    assert api.calls == [("like", post.id)]


def test_failed_like_restores_card_and_feed(api) -> None:
    post = _post(likes_count=2)
    feed, card = _wired(api, post)
    api.fail = True

    assert card.toggle_like() is False

    assert card.is_liked is False
    assert card.post.model_dump() == post.model_dump()
    assert feed.posts[0].model_dump() == post.model_dump()
    assert card.error == "Backend unavailable"
    assert card.like_pending is False


def test_unlike_floors_count_at_zero_and_rolls_back(api) -> None:
    post = _post(likes=[LikeSummary(id=uuid4(), user_id=VIEWER)], likes_count=0, viewer_has_liked=True)
    feed, card = _wired(api, post)
    api.fail = True

    seen_counts = []
    card._on_patch = lambda post_id, **fields: seen_counts.append(fields["likes_count"])
    card.toggle_like()

    assert seen_counts == [0, 0]
    assert card.is_liked is True
    assert card.post.model_dump() == post.model_dump()


def test_reentrant_like_is_ignored(api) -> None:
    post = _post()
    _, card = _wired(api, post)
    nested = []
    api.on_like = lambda: nested.append(card.toggle_like())

    assert card.toggle_like() is True

    assert nested == [False]
    assert api.calls == [("like", post.id)]
    assert card.is_liked is True


def test_like_without_identity_is_ignored(api) -> None:
    _, card = _wired(api, _post(), viewer=None)

    assert card.toggle_like() is False
    assert api.calls == []


def test_comments_are_fetched_once(api) -> None:
    post = _post()
    _, card = _wired(api, post)
    api.comments = [_comment(post.id, "first")]

    assert [c.content for c in card.open_comments()] == ["first"]
    card.close_comments()
    assert [c.content for c in card.open_comments()] == ["first"]
    assert api.calls == [("list_comments", post.id)]


@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_blank_comments_never_reach_the_backend(api, text: str) -> None:
    _, card = _wired(api, _post())

    assert card.add_comment(text) is None
    assert api.calls == []
    assert card.error == "Comment cannot be empty"


def test_add_comment_appends_and_patches_count(api) -> None:
    post = _post()
    feed, card = _wired(api, post)
    card.open_comments()

    created = card.add_comment("  nice one ")

    assert created.content == "nice one"
    assert [c.content for c in card.comments] == ["nice one"]
    assert card.post.comments_count == 1
    assert feed.posts[0].comments_count == 1


def test_failed_comment_load_surfaces_error(api) -> None:
    post = _post()
    _, card = _wired(api, post)
    api.fail = True

    assert card.open_comments() == []
    assert card.comments is None
    assert card.error == "Backend unavailable"


def test_unlike_drops_viewer_like_record_from_feed(api) -> None:
    post = _post(likes=[LikeSummary(id=uuid4(), user_id=VIEWER)], likes_count=1, viewer_has_liked=True)
    feed, card = _wired(api, post)

    assert card.toggle_like() is True

    assert feed.posts[0].likes == []
    assert feed.card_for(feed.posts[0]).is_liked is False


def test_card_rebuilt_after_like_reports_membership(api) -> None:
    feed, card = _wired(api, _post())

    assert card.toggle_like() is True

    rebuilt = feed.card_for(feed.posts[0])
    assert rebuilt.is_liked is True
    assert rebuilt.toggle_like() is True
    assert api.calls[-1] == ("unlike", feed.posts[0].id)
