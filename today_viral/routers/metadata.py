"""Video metadata lookup used by the composer preview."""
from __future__ import annotations

from fastapi import APIRouter, Query

from ..schemas import VideoMetadataResponse
from ..services import resolve_metadata

router = APIRouter(prefix="/api", tags=["metadata"])


@router.get("/metadata", response_model=VideoMetadataResponse)
async def metadata_endpoint(url: str = Query(..., min_length=1, max_length=2048)) -> VideoMetadataResponse:
    return await resolve_metadata(url)
