"""Landing page surface."""
from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from today_viral.constants import LANDING_ROUTE
from ..template_helpers import render_template

router = APIRouter()


@router.get(LANDING_ROUTE, response_class=HTMLResponse)
async def landing(request: Request) -> HTMLResponse:
    return render_template(
        request,
        "landing.html",
        {
            "page_title": "Today Viral",
            "active_nav": LANDING_ROUTE,
        },
    )
