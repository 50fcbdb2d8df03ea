"""Own and public profile page surfaces."""
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from today_viral.constants import PROFILE_ROUTE
from ..template_helpers import render_template

router = APIRouter()


@router.get(PROFILE_ROUTE, response_class=HTMLResponse)
async def profile(request: Request) -> HTMLResponse:
    return render_template(
        request,
        "profile.html",
        {
            "page_title": "Profile",
            "active_nav": PROFILE_ROUTE,
            "profile_user_id": None,
        },
    )


@router.get(PROFILE_ROUTE + "/{user_id}", response_class=HTMLResponse)
async def public_profile(request: Request, user_id: UUID) -> HTMLResponse:
    return render_template(
        request,
        "profile.html",
        {
            "page_title": "Profile",
            "active_nav": PROFILE_ROUTE,
            "profile_user_id": str(user_id),
        },
    )
