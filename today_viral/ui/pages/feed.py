"""Go Viral feed page; the first window is rendered server-side, later windows load on scroll."""
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse
from markupsafe import Markup

from today_viral.clients import Identity
from today_viral.constants import FEED_PAGE_SIZE, FEED_ROUTE
from today_viral.database import create_session
from today_viral.schemas import PostResponse
from today_viral.services import get_optional_identity, list_feed_page
from ..components.cards import video_card
from ..template_helpers import render_template

router = APIRouter()


def _load_window(page: int, viewer_id: UUID | None) -> tuple[list[PostResponse], bool]:
    with create_session() as session:
        items, has_more = list_feed_page(session, page=page, viewer_id=viewer_id)
    return [PostResponse.model_validate(item) for item in items], has_more


@router.get(FEED_ROUTE, response_class=HTMLResponse)
async def go_viral(request: Request) -> HTMLResponse:
    posts, has_more = _load_window(1, None)
    return render_template(
        request,
        "go_viral.html",
        {
            "page_title": "Go Viral",
            "active_nav": FEED_ROUTE,
            "posts": posts,
            "has_more": has_more,
            "page_size": FEED_PAGE_SIZE,
        },
    )


@router.get(FEED_ROUTE + "/cards", response_class=HTMLResponse)
async def feed_cards(
    page: int = Query(default=1, ge=1),
    identity: Identity | None = Depends(get_optional_identity),
) -> HTMLResponse:
    """Render one feed window as card fragments for infinite scroll."""

    posts, has_more = _load_window(page, identity.id if identity else None)
    body = Markup("").join(video_card(post) for post in posts)
    return HTMLResponse(content=str(body), headers={"X-Has-More": "true" if has_more else "false"})
