"""Admin auto-populate endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from src.modules.auth.dependencies import require_admin
from src.modules.content.schemas import (
    AircraftAutoPopulateRequest,
    AircraftAutoPopulateResponse,
    BlogAutoPopulateRequest,
    BlogAutoPopulateResponse,
)
from src.modules.content.service import ContentGenerationService
from src.rate_limit import limiter

router = APIRouter(prefix="/admin", tags=["auto-populate"], dependencies=[Depends(require_admin)])


def get_content_service() -> ContentGenerationService:
    return ContentGenerationService()


@router.post("/aircraft/auto-populate", response_model=AircraftAutoPopulateResponse)
@limiter.limit("10/minute")
async def auto_populate_aircraft(
    request: Request,
    body: AircraftAutoPopulateRequest,
    service: ContentGenerationService = Depends(get_content_service),
):
    """Draft listing fields from a short title such as "1978 Piper Archer II"."""
    return await service.auto_populate_aircraft(body.title)


@router.post("/blog/auto-populate", response_model=BlogAutoPopulateResponse)
@limiter.limit("10/minute")
async def auto_populate_blog(
    request: Request,
    body: BlogAutoPopulateRequest,
    service: ContentGenerationService = Depends(get_content_service),
):
    """Draft a blog post from a topic."""
    return await service.auto_populate_blog(body.topic)
