"""Schemas for the video metadata lookup."""
from __future__ import annotations

from pydantic import BaseModel

from ..platforms import Platform

DEFAULT_TITLE = "Viral Video"
DEFAULT_DESCRIPTION = "Shared via Today Viral"


class VideoMetadataResponse(BaseModel):
    title: str = DEFAULT_TITLE
    description: str = DEFAULT_DESCRIPTION
    thumbnail_url: str = ""
    duration: int = 0
    platform: Platform = Platform.OTHER


__all__ = ["DEFAULT_DESCRIPTION", "DEFAULT_TITLE", "VideoMetadataResponse"]
