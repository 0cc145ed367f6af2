"""Admin photo collection API router: list, upload, reorder, edit, delete."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from src.modules.auth.dependencies import require_admin
from src.modules.photos.dependencies import (
    batch_to_response,
    check_upload_count,
    get_photo_manager,
    photo_to_response,
    read_uploads,
)
from src.modules.photos.manager import PhotoCollectionManager
from src.modules.photos.schemas import (
    PhotoBatchResponse,
    PhotoListResponse,
    PhotoReorderRequest,
    PhotoResponse,
    PhotoUpdateRequest,
)

router = APIRouter(
    prefix="/admin/aircraft/{aircraft_id}/photos",
    tags=["aircraft-photos"],
    dependencies=[Depends(require_admin)],
)


def _list_response(photos, manager: PhotoCollectionManager, request: Request) -> PhotoListResponse:
    return PhotoListResponse(photos=[photo_to_response(p, manager.store, request) for p in photos])


@router.get("", response_model=PhotoListResponse)
async def list_photos(
    aircraft_id: uuid.UUID,
    request: Request,
    manager: PhotoCollectionManager = Depends(get_photo_manager),
):
    """Photos of one listing ordered by display order, with public URLs."""
    photos = await manager.list_photos(aircraft_id)
    return _list_response(photos, manager, request)


@router.post("", response_model=PhotoBatchResponse, status_code=201)
async def upload_photos(
    aircraft_id: uuid.UUID,
    request: Request,
    photos: list[UploadFile] = File(default=[]),
    alt_text: list[str] = Form(default=[]),
    caption: list[str] = Form(default=[]),
    manager: PhotoCollectionManager = Depends(get_photo_manager),
):
    """Upload one or more photos; each file succeeds or fails on its own.

    Optional ``alt_text`` and ``caption`` parts pair with ``photos`` by position.
    """
    check_upload_count(photos)
    uploads = await read_uploads(photos, alt_text, caption, manager.max_bytes)
    result = await manager.upload_batch(aircraft_id, uploads)
    return batch_to_response(result, manager.store, request)


@router.put("/reorder", response_model=PhotoListResponse)
async def reorder_photos(
    aircraft_id: uuid.UUID,
    body: PhotoReorderRequest,
    request: Request,
    manager: PhotoCollectionManager = Depends(get_photo_manager),
):
    """Apply a complete new order. Rejected with 409 unless every photo is listed once."""
    ordered = sorted(body.photo_orders, key=lambda item: item.display_order)
    photos = await manager.reorder(aircraft_id, [item.id for item in ordered])
    return _list_response(photos, manager, request)


@router.patch("/{photo_id}", response_model=PhotoResponse)
async def update_photo(
    aircraft_id: uuid.UUID,
    photo_id: uuid.UUID,
    body: PhotoUpdateRequest,
    request: Request,
    manager: PhotoCollectionManager = Depends(get_photo_manager),
):
    photo = await manager.update_details(
        aircraft_id, photo_id, alt_text=body.alt_text, caption=body.caption
    )
    return photo_to_response(photo, manager.store, request)


@router.post("/{photo_id}/primary", response_model=PhotoListResponse)
async def set_primary_photo(
    aircraft_id: uuid.UUID,
    photo_id: uuid.UUID,
    request: Request,
    manager: PhotoCollectionManager = Depends(get_photo_manager),
):
    photos = await manager.set_primary(aircraft_id, photo_id)
    return _list_response(photos, manager, request)


@router.delete("/{photo_id}", response_model=PhotoListResponse)
async def delete_photo(
    aircraft_id: uuid.UUID,
    photo_id: uuid.UUID,
    request: Request,
    manager: PhotoCollectionManager = Depends(get_photo_manager),
):
    """Delete one photo and return the remaining ones. No renumbering."""
    await manager.remove(aircraft_id, photo_id)
    photos = await manager.repository.list_for_aircraft(aircraft_id)
    return _list_response(photos, manager, request)
