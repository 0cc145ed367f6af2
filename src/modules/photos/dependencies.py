"""FastAPI dependency functions for the photo collection manager."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from fastapi import Depends, Request, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from src.config import settings
from src.database.session import get_db
from src.exceptions import BadRequestException
from src.models.aircraft_photo import AircraftPhoto
from src.modules.photos.manager import BatchUploadResult, PhotoCollectionManager, PhotoUpload
from src.modules.photos.repository import PhotoRepository
from src.modules.photos.schemas import (
    PhotoBatchResponse,
    PhotoOutcomeResponse,
    PhotoResponse,
)
from src.modules.storage.base import PhotoStore
from src.modules.storage.factory import get_aircraft_photo_store

logger = logging.getLogger(__name__)


def get_photo_manager(
    db: AsyncSession = Depends(get_db),
    store: PhotoStore = Depends(get_aircraft_photo_store),
) -> PhotoCollectionManager:
    return PhotoCollectionManager(
        repository=PhotoRepository(db),
        store=store,
        max_bytes=settings.photo_max_upload_bytes,
        max_files=settings.photo_max_files_per_request,
    )


def check_upload_count(files: Sequence[UploadFile]) -> None:
    """400 when a photo upload request carries no files or too many."""
    count = sum(1 for f in files if f.filename)
    if not count:
        raise BadRequestException("No photos provided")
    if count > settings.photo_max_files_per_request:
        raise BadRequestException(
            f"Too many photos: {count}. Maximum per request: "
            f"{settings.photo_max_files_per_request}"
        )


async def read_uploads(
    files: Sequence[UploadFile],
    alt_texts: Sequence[str] = (),
    captions: Sequence[str] = (),
    max_bytes: int | None = None,
) -> list[PhotoUpload]:
    """Pair each ``photos`` part with the ``alt_text``/``caption`` parts at the same position.

    A body whose declared size is already over ``max_bytes`` is left unread;
    the manager rejects it on size.
    """
    if max_bytes is None:
        max_bytes = settings.photo_max_upload_bytes
    uploads: list[PhotoUpload] = []
    for index, upload_file in enumerate(files):
        if not upload_file.filename:
            continue
        alt_text = alt_texts[index] if index < len(alt_texts) else ""
        caption = captions[index] if index < len(captions) else ""
        declared = upload_file.size
        if declared is not None and declared > max_bytes:
            logger.info("Skipping read of %s: declared %d bytes", upload_file.filename, declared)
            data, declared_size = b"", declared
        else:
            data, declared_size = await upload_file.read(), None
        uploads.append(
            PhotoUpload(
                filename=upload_file.filename,
                content_type=upload_file.content_type or "",
                data=data,
                alt_text=alt_text,
                caption=caption or None,
                declared_size=declared_size,
            )
        )
    return uploads


def photo_to_response(photo: AircraftPhoto, store: PhotoStore, request: Request | None = None) -> PhotoResponse:
    response = PhotoResponse.model_validate(photo)
    response.url = store.public_url(
        photo.storage_path, request.url.hostname if request is not None else None
    )
    return response


def batch_to_response(
    result: BatchUploadResult, store: PhotoStore, request: Request | None = None
) -> PhotoBatchResponse:
    return PhotoBatchResponse(
        photos=[photo_to_response(p, store, request) for p in result.photos],
        outcomes=[PhotoOutcomeResponse.model_validate(o) for o in result.outcomes],
        created=len(result.photos),
        failed=len(result.failed),
    )
