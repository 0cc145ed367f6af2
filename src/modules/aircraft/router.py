"""Aircraft listing API routers: admin back-office and public browse."""

from __future__ import annotations

import json
import uuid
from collections.abc import Sequence
from decimal import Decimal

from fastapi import APIRouter, Depends, Query, Request
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import UploadFile

from src.database.session import get_db
from src.exceptions import ValidationException
from src.models.aircraft import Aircraft
from src.models.aircraft_photo import AircraftPhoto
from src.modules.aircraft.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from src.modules.aircraft.schemas import (
    AircraftCreate,
    AircraftCreateRequest,
    AircraftCreateResponse,
    AircraftListResponse,
    AircraftResponse,
    AircraftSearchFilters,
    AircraftSearchResponse,
    AircraftUpdate,
)
from src.modules.aircraft.service import AircraftService
from src.modules.auth.auth import AuthenticatedUser
from src.modules.auth.dependencies import require_admin
from src.modules.photos.dependencies import (
    batch_to_response,
    get_photo_manager,
    photo_to_response,
    read_uploads,
)
from src.modules.photos.manager import PhotoCollectionManager, PhotoUpload, effective_primary
from src.modules.storage.base import PhotoStore
from src.modules.storage.factory import get_aircraft_photo_store
from src.rate_limit import limiter

admin_router = APIRouter(prefix="/admin/aircraft", tags=["admin-aircraft"])
public_router = APIRouter(prefix="/aircraft", tags=["aircraft"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def aircraft_to_response(
    aircraft: Aircraft,
    store: PhotoStore,
    request: Request | None = None,
    photos: Sequence[AircraftPhoto] | None = None,
) -> AircraftResponse:
    photos = list(aircraft.photos if photos is None else photos)
    response = AircraftResponse.model_validate(aircraft)
    response.photos = [photo_to_response(p, store, request) for p in photos]
    primary = effective_primary(photos)
    if primary is not None:
        response.primary_photo_url = store.public_url(
            primary.storage_path, request.url.hostname if request is not None else None
        )
    return response


def _validation_details(exc: ValidationError) -> list[dict]:
    return [
        {"field": ".".join(str(loc) for loc in err.get("loc", [])), "message": err.get("msg", "")}
        for err in exc.errors()
    ]


async def _parse_create_request(
    request: Request, max_bytes: int
) -> tuple[AircraftCreate, list[PhotoUpload]]:
    """Accept either ``{"aircraft": {...}}`` JSON or multipart ``aircraft`` + ``photos``.

    Multipart requests may carry ``alt_text`` and ``caption`` parts paired with
    ``photos`` by position.
    """
    content_type = request.headers.get("content-type", "")
    try:
        if content_type.startswith("multipart/form-data"):
            form = await request.form()
            raw = form.get("aircraft")
            if not isinstance(raw, str):
                raise ValidationException(
                    "Validation failed", [{"field": "aircraft", "message": "Field required"}]
                )
            data = AircraftCreate.model_validate_json(raw)
            files = [f for f in form.getlist("photos") if isinstance(f, UploadFile)]
            alt_texts = [v for v in form.getlist("alt_text") if isinstance(v, str)]
            captions = [v for v in form.getlist("caption") if isinstance(v, str)]
            return data, await read_uploads(files, alt_texts, captions, max_bytes)
        body = await request.json()
        return AircraftCreateRequest.model_validate(body).aircraft, []
    except ValidationError as exc:
        raise ValidationException("Validation failed", _validation_details(exc)) from exc
    except json.JSONDecodeError as exc:
        raise ValidationException("Request body is not valid JSON") from exc


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------


@admin_router.post("", response_model=AircraftCreateResponse, status_code=201)
async def create_aircraft(
    request: Request,
    user: AuthenticatedUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    manager: PhotoCollectionManager = Depends(get_photo_manager),
):
    """Create a listing, then attach any submitted photos.

    Only the listing row can fail the request; photo problems, including
    files over the per-request limit, are reported per file in ``outcomes``.
    """
    data, uploads = await _parse_create_request(request, manager.max_bytes)
    svc = AircraftService(db)
    aircraft = await svc.create(data, user.id)

    if not uploads:
        return AircraftCreateResponse(aircraft=aircraft_to_response(aircraft, manager.store, request, photos=[]))

    result = await manager.upload_batch(aircraft.id, uploads)
    batch = batch_to_response(result, manager.store, request)
    return AircraftCreateResponse(
        aircraft=aircraft_to_response(aircraft, manager.store, request, photos=result.photos),
        photos=batch.photos,
        outcomes=batch.outcomes,
    )


@admin_router.get("", response_model=AircraftListResponse)
async def list_aircraft_admin(
    request: Request,
    _user: AuthenticatedUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    store: PhotoStore = Depends(get_aircraft_photo_store),
):
    """All listings including drafts, newest first."""
    aircraft = await AircraftService(db).list_admin()
    return AircraftListResponse(
        aircraft=[aircraft_to_response(a, store, request) for a in aircraft],
        total=len(aircraft),
    )


@admin_router.get("/{aircraft_id}", response_model=AircraftResponse)
async def get_aircraft_admin(
    aircraft_id: uuid.UUID,
    request: Request,
    _user: AuthenticatedUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    store: PhotoStore = Depends(get_aircraft_photo_store),
):
    aircraft = await AircraftService(db).get(aircraft_id)
    return aircraft_to_response(aircraft, store, request)


@admin_router.put("/{aircraft_id}", response_model=AircraftResponse)
async def update_aircraft(
    aircraft_id: uuid.UUID,
    body: AircraftUpdate,
    request: Request,
    _user: AuthenticatedUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    store: PhotoStore = Depends(get_aircraft_photo_store),
):
    aircraft = await AircraftService(db).update(aircraft_id, body)
    return aircraft_to_response(aircraft, store, request)


@admin_router.delete("/{aircraft_id}", response_model=AircraftResponse)
async def delete_aircraft(
    aircraft_id: uuid.UUID,
    request: Request,
    _user: AuthenticatedUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    store: PhotoStore = Depends(get_aircraft_photo_store),
):
    """Soft delete (status becomes ``deleted``)."""
    aircraft = await AircraftService(db).delete(aircraft_id)
    return aircraft_to_response(aircraft, store, request, photos=[])


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------


@public_router.get("", response_model=AircraftSearchResponse)
@limiter.limit("60/minute")
async def search_aircraft(
    request: Request,
    query: str | None = Query(None, max_length=200),
    price_min: Decimal | None = Query(None, ge=0),
    price_max: Decimal | None = Query(None, ge=0),
    year_min: int | None = Query(None),
    year_max: int | None = Query(None),
    make: str | None = Query(None),
    model: str | None = Query(None),
    engine_type: str | None = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    db: AsyncSession = Depends(get_db),
    store: PhotoStore = Depends(get_aircraft_photo_store),
):
    """Browse active listings."""
    filters = AircraftSearchFilters(
        query=query,
        price_min=price_min,
        price_max=price_max,
        year_min=year_min,
        year_max=year_max,
        make=make,
        model=model,
        engine_type=engine_type,
    )
    items, total = await AircraftService(db).search(filters, page=page, limit=limit)
    return AircraftSearchResponse(
        items=[aircraft_to_response(a, store, request) for a in items],
        total=total,
        page=page,
        limit=limit,
    )


@public_router.get("/{slug}", response_model=AircraftResponse)
async def get_aircraft_by_slug(
    slug: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    store: PhotoStore = Depends(get_aircraft_photo_store),
):
    aircraft = await AircraftService(db).get_by_slug(slug)
    return aircraft_to_response(aircraft, store, request)
