"""Utilities for rendering UI templates with shared context."""
from __future__ import annotations

from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.templating import Jinja2Templates

from today_viral.config import get_settings
from today_viral.platforms import PLATFORMS
from . import components

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

_BASE_COMPONENTS = {
    "cards": components.cards,
    "layout": components.layout,
}


def render_template(request: Request, template_name: str, context: dict[str, Any] | None = None):
    """Return a TemplateResponse with the shared page context."""

    base_context: dict[str, Any] = {
        "request": request,
        "app_name": get_settings().app_name,
        "components": _BASE_COMPONENTS,
        "platforms": PLATFORMS,
        "active_nav": None,
        "page_title": "",
    }
    if context:
        base_context.update(context)

    return templates.TemplateResponse(request, template_name, base_context)
