"""Photo collection manager: the only writer of listing photo rows and blobs.

Blob storage and the database are not covered by one transaction, so every
multi-step write here is sequenced so that a row never outlives its blob:

* ``upload_batch`` stores the blob first, then inserts the row; when the insert
  fails the freshly stored blob is deleted again (compensation).
* ``remove`` deletes the blob first (best effort), then the row.
"""

from __future__ import annotations

import logging
import re
import time
import uuid
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import PurePath

from src.exceptions import (
    InvalidPhotoSetException,
    NotFoundException,
    PhotoPersistException,
    PhotoValidationException,
)
from src.models.aircraft_photo import AircraftPhoto
from src.models.enums import PhotoFailureKind, PhotoOutcomeStatus
from src.modules.photos.constants import (
    ALLOWED_CONTENT_TYPES,
    DEFAULT_NAME_SLUG,
    MAX_NAME_SLUG_LENGTH,
    MAX_PHOTO_BYTES,
    STORAGE_PREFIX,
)
from src.modules.photos.repository import PhotoRepository
from src.modules.photos.validation import validate_photo
from src.modules.storage.base import PhotoStore, StorageError

logger = logging.getLogger(__name__)


@dataclass
class PhotoUpload:
    """A candidate file: raw bytes plus the metadata the client sent with it."""

    filename: str
    content_type: str
    data: bytes
    alt_text: str = ""
    caption: str | None = None
    # Size the client declared for a body that was deliberately not read
    declared_size: int | None = None

    @property
    def size(self) -> int:
        if self.declared_size is not None:
            return self.declared_size
        return len(self.data)


@dataclass
class PhotoOutcome:
    index: int
    filename: str
    status: PhotoOutcomeStatus
    error_kind: PhotoFailureKind | None = None
    message: str | None = None
    photo_id: uuid.UUID | None = None


@dataclass
class BatchUploadResult:
    photos: list[AircraftPhoto] = field(default_factory=list)
    outcomes: list[PhotoOutcome] = field(default_factory=list)

    @property
    def failed(self) -> list[PhotoOutcome]:
        return [o for o in self.outcomes if o.status == PhotoOutcomeStatus.FAILED]


def sanitize_filename(filename: str) -> str:
    stem = PurePath(filename or "").stem.lower()
    slug = re.sub(r"[^a-z0-9]+", "-", stem).strip("-")
    return slug[:MAX_NAME_SLUG_LENGTH].rstrip("-") or DEFAULT_NAME_SLUG


def build_storage_path(
    aircraft_id: uuid.UUID, filename: str, content_type: str, seq: int, timestamp_ms: int | None = None
) -> str:
    """``aircraft/{aircraft_id}/{timestamp_ms}-{seq}-{name}.{ext}``"""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    ext = ALLOWED_CONTENT_TYPES[content_type]
    return f"{STORAGE_PREFIX}/{aircraft_id}/{timestamp_ms}-{seq:02d}-{sanitize_filename(filename)}.{ext}"


def effective_primary(photos: Sequence[AircraftPhoto]) -> AircraftPhoto | None:
    """The flagged photo if any, else the lowest-ranked one."""
    if not photos:
        return None
    for photo in photos:
        if photo.is_primary:
            return photo
    return min(photos, key=lambda p: (p.display_order, p.created_at))


class PhotoCollectionManager:
    def __init__(
        self,
        repository: PhotoRepository,
        store: PhotoStore,
        max_bytes: int = MAX_PHOTO_BYTES,
        max_files: int | None = None,
    ):
        self.repository = repository
        self.store = store
        self.max_bytes = max_bytes
        self.max_files = max_files

    async def _require_aircraft(self, aircraft_id: uuid.UUID) -> None:
        if not await self.repository.aircraft_exists(aircraft_id):
            raise NotFoundException(f"Aircraft {aircraft_id} not found")

    async def _require_photo(self, aircraft_id: uuid.UUID, photo_id: uuid.UUID) -> AircraftPhoto:
        photo = await self.repository.get(aircraft_id, photo_id)
        if photo is None:
            raise NotFoundException(f"Photo {photo_id} not found")
        return photo

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def list_photos(self, aircraft_id: uuid.UUID) -> list[AircraftPhoto]:
        await self._require_aircraft(aircraft_id)
        return await self.repository.list_for_aircraft(aircraft_id)

    # ------------------------------------------------------------------
    # Upload
    # ------------------------------------------------------------------

    async def upload_batch(
        self, aircraft_id: uuid.UUID, files: Sequence[PhotoUpload]
    ) -> BatchUploadResult:
        """Validate, store and record each file in input order.

        A failing file never stops the batch. Display order is compacted:
        only created photos take a position, starting after the rows that
        existed before the batch. The first photo ever added becomes primary.
        Files past ``max_files`` are reported as validation failures.
        """
        await self._require_aircraft(aircraft_id)
        existing = await self.repository.count_for_aircraft(aircraft_id)
        result = BatchUploadResult()

        for index, upload in enumerate(files):
            if self.max_files is not None and index >= self.max_files:
                result.outcomes.append(
                    PhotoOutcome(
                        index=index,
                        filename=upload.filename,
                        status=PhotoOutcomeStatus.FAILED,
                        error_kind=PhotoFailureKind.VALIDATION,
                        message=f"Too many photos. Maximum per request: {self.max_files}",
                    )
                )
                continue
            try:
                content_type = validate_photo(upload.content_type, upload.size, self.max_bytes)
            except PhotoValidationException as exc:
                logger.info("Rejected %s for aircraft %s: %s", upload.filename, aircraft_id, exc.reason)
                result.outcomes.append(
                    PhotoOutcome(
                        index=index,
                        filename=upload.filename,
                        status=PhotoOutcomeStatus.FAILED,
                        error_kind=PhotoFailureKind.VALIDATION,
                        message=exc.message,
                    )
                )
                continue

            path = build_storage_path(aircraft_id, upload.filename, content_type, index)
            try:
                await self.store.put(path, upload.data, content_type)
            except StorageError as exc:
                logger.warning("Upload failed for %s (%s): %s", upload.filename, path, exc)
                result.outcomes.append(
                    PhotoOutcome(
                        index=index,
                        filename=upload.filename,
                        status=PhotoOutcomeStatus.FAILED,
                        error_kind=PhotoFailureKind.UPLOAD,
                        message=str(exc),
                    )
                )
                continue

            position = existing + len(result.photos)
            try:
                photo = await self.repository.insert(
                    aircraft_id=aircraft_id,
                    storage_path=path,
                    display_order=position,
                    is_primary=existing == 0 and not result.photos,
                    alt_text=upload.alt_text,
                    caption=upload.caption,
                )
            except PhotoPersistException as exc:
                await self._discard_blob(path)
                result.outcomes.append(
                    PhotoOutcome(
                        index=index,
                        filename=upload.filename,
                        status=PhotoOutcomeStatus.FAILED,
                        error_kind=PhotoFailureKind.PERSIST,
                        message=exc.message,
                    )
                )
                continue

            result.photos.append(photo)
            result.outcomes.append(
                PhotoOutcome(
                    index=index,
                    filename=upload.filename,
                    status=PhotoOutcomeStatus.CREATED,
                    photo_id=photo.id,
                )
            )

        logger.info(
            "Photo batch for aircraft %s: %d created, %d failed",
            aircraft_id,
            len(result.photos),
            len(result.failed),
        )
        return result

    async def _discard_blob(self, path: str) -> None:
        try:
            await self.store.delete(path)
        except StorageError as exc:
            logger.error("Compensating delete failed, orphaned blob %s: %s", path, exc)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def remove(self, aircraft_id: uuid.UUID, photo_id: uuid.UUID) -> None:
        """Delete blob (best effort) then row. Order and primary flags are left alone."""
        photo = await self._require_photo(aircraft_id, photo_id)
        try:
            await self.store.delete(photo.storage_path)
        except StorageError as exc:
            logger.warning("Blob delete failed for %s, removing row anyway: %s", photo.storage_path, exc)
        await self.repository.delete(photo)
        logger.info("Removed photo %s from aircraft %s", photo_id, aircraft_id)

    async def reorder(
        self, aircraft_id: uuid.UUID, ordered_ids: Sequence[uuid.UUID]
    ) -> list[AircraftPhoto]:
        """Rank photos by their position in ``ordered_ids``.

        The list must name every current photo exactly once; otherwise
        nothing is written. The photo moved to the front becomes primary.
        """
        await self._require_aircraft(aircraft_id)
        current = await self.repository.list_for_aircraft(aircraft_id)
        current_ids = {photo.id for photo in current}
        requested = list(ordered_ids)

        details: list[dict] = []
        seen: set[uuid.UUID] = set()
        for photo_id in requested:
            if photo_id in seen:
                details.append({"field": "photo_orders", "message": f"Duplicate photo id {photo_id}"})
            elif photo_id not in current_ids:
                details.append({"field": "photo_orders", "message": f"Unknown photo id {photo_id}"})
            seen.add(photo_id)
        for photo_id in current_ids - seen:
            details.append({"field": "photo_orders", "message": f"Missing photo id {photo_id}"})
        if details:
            raise InvalidPhotoSetException(
                "Reorder must list every photo of the aircraft exactly once", details
            )

        await self.repository.apply_order(aircraft_id, requested)
        return await self.repository.list_for_aircraft(aircraft_id)

    async def set_primary(self, aircraft_id: uuid.UUID, photo_id: uuid.UUID) -> list[AircraftPhoto]:
        await self._require_photo(aircraft_id, photo_id)
        await self.repository.set_primary(aircraft_id, photo_id)
        return await self.repository.list_for_aircraft(aircraft_id)

    async def update_details(
        self,
        aircraft_id: uuid.UUID,
        photo_id: uuid.UUID,
        alt_text: str | None = None,
        caption: str | None = None,
    ) -> AircraftPhoto:
        photo = await self._require_photo(aircraft_id, photo_id)
        return await self.repository.update_details(photo, alt_text=alt_text, caption=caption)
