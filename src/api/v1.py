"""Centralized v1 API router: all module routers are included here."""

from fastapi import APIRouter

from src.modules.aircraft.router import admin_router as admin_aircraft_router
from src.modules.aircraft.router import public_router as aircraft_router
from src.modules.blog.router import admin_router as admin_blog_router
from src.modules.blog.router import public_router as blog_router
from src.modules.content.router import router as content_router
from src.modules.photos.router import router as photos_router
from src.schemas.responses import ErrorResponse

_error_responses = {
    status: {"model": ErrorResponse} for status in (400, 401, 403, 404, 409, 422, 500, 502)
}

v1_router = APIRouter(prefix="/api/v1", responses=_error_responses)
v1_router.include_router(content_router)
v1_router.include_router(admin_aircraft_router)
v1_router.include_router(photos_router)
v1_router.include_router(admin_blog_router)
v1_router.include_router(aircraft_router)
v1_router.include_router(blog_router)
