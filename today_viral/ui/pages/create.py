"""Share-a-video page surface."""
from __future__ import annotations

import json

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from today_viral.constants import CREATE_ROUTE
from today_viral.platforms import PLATFORMS
from ..template_helpers import render_template

router = APIRouter()

# Client-side hint only; the server classifies the URL again on submit.
_PLATFORMS_JSON = json.dumps(
    [{"name": info.name, "icon": info.icon, "domains": list(info.domains)} for info in PLATFORMS.values()]
)


@router.get(CREATE_ROUTE, response_class=HTMLResponse)
async def create(request: Request) -> HTMLResponse:
    return render_template(
        request,
        "create.html",
        {
            "page_title": "Share a Video",
            "active_nav": CREATE_ROUTE,
            "platforms_json": _PLATFORMS_JSON,
        },
    )
