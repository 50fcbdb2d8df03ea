"""Integration tests for reading and editing profiles."""
from __future__ import annotations

from uuid import uuid4


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def test_profile_edit_replaces_all_fields(client, register) -> None:
    token = register("editor@example.com")["access_token"]

    first = client.put(
        "/profiles/me",
        json={"username": "editor_1", "full_name": "Ed Itor", "bio": "Loves clips", "website": "https://example.com"},
        headers=_bearer(token),
    )
    assert first.status_code == 200
    body = first.json()
    assert body["username"] == "editor_1"
    assert body["bio"] == "Loves clips"
    assert body["website"].startswith("https://example.com")

    second = client.put("/profiles/me", json={"username": "editor_1", "bio": "  "}, headers=_bearer(token))
    assert second.status_code == 200
    assert second.json()["full_name"] is None
    assert second.json()["bio"] is None
    assert second.json()["website"] is None

    me = client.get("/profiles/me", headers=_bearer(token)).json()
    assert me["username"] == "editor_1"
    assert me["bio"] is None


def test_profile_edit_rejects_taken_or_invalid_usernames(client, register) -> None:
    register("taken@example.com", username="taken_name")
    token = register("editor@example.com")["access_token"]

    conflict = client.put("/profiles/me", json={"username": "taken_name"}, headers=_bearer(token))
    assert conflict.status_code == 409

    for bad in ("ab", "has space", "x" * 51):
        assert client.put("/profiles/me", json={"username": bad}, headers=_bearer(token)).status_code == 422

    assert client.put("/profiles/me", json={"username": "nobody"}).status_code == 401


def test_public_profile_and_posts(client, register, share) -> None:
    author = register("author@example.com")
    other = register("other@example.com")["access_token"]
    share(author["access_token"], "https://youtu.be/mine")
    share(other, "https://youtu.be/theirs")

    profile = client.get(f"/profiles/{author['user_id']}")
    assert profile.status_code == 200
    assert profile.json()["username"] == "author"

    posts = client.get(f"/profiles/{author['user_id']}/posts").json()["items"]
    assert len(posts) == 1
    assert posts[0]["video_url"] == "https://youtu.be/mine"

    assert client.get(f"/profiles/{uuid4()}").status_code == 404
    assert client.get(f"/profiles/{uuid4()}/posts").status_code == 404
