"""Sign-in / sign-up page."""
from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from today_viral.constants import SIGN_IN_ROUTE
from ..template_helpers import render_template

router = APIRouter()


@router.get(SIGN_IN_ROUTE, response_class=HTMLResponse)
async def auth(request: Request, mode: str = "sign-in") -> HTMLResponse:
    return render_template(
        request,
        "auth.html",
        {
            "page_title": "Join Today Viral" if mode == "sign-up" else "Welcome Back",
            "active_nav": SIGN_IN_ROUTE,
            "is_sign_up": mode == "sign-up",
        },
    )
