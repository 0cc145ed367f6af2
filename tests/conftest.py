"""Shared fixtures: in-memory photo store and repository fakes, app client."""

import os

# Must be set before src.config is imported
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("LOG_JSON", "false")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("STORAGE_BACKEND", "filesystem")

import uuid
from datetime import UTC, datetime, timedelta

import pytest

import src.models  # noqa: F401  (registers all mappers)
from src.exceptions import PhotoPersistException
from src.models.aircraft_photo import AircraftPhoto
from src.modules.storage.base import ObjectExistsError, PhotoStore, StorageError
from src.modules.storage.urls import build_public_url

PUBLIC_BASE = "http://127.0.0.1:54321/storage/v1/object/public"


class InMemoryPhotoStore(PhotoStore):
    """Dict-backed store; failures are injected per path fragment."""

    def __init__(self, bucket: str = "aircraft-photos"):
        self.bucket = bucket
        self.objects: dict[str, bytes] = {}
        self.put_calls: list[str] = []
        self.deleted: list[str] = []
        self.fail_put_containing: set[str] = set()
        self.fail_delete = False

    async def put(self, path, data, content_type, *, overwrite=False):
        self.put_calls.append(path)
        if any(fragment in path for fragment in self.fail_put_containing):
            raise StorageError(f"Simulated upload failure for {path}")
        if path in self.objects and not overwrite:
            raise ObjectExistsError(path)
        self.objects[path] = data
        return path

    async def delete(self, path):
        self.deleted.append(path)
        if self.fail_delete:
            raise StorageError(f"Simulated delete failure for {path}")
        self.objects.pop(path, None)

    def public_url(self, path, request_host=None):
        return build_public_url(PUBLIC_BASE, self.bucket, path, request_host)


class InMemoryPhotoRepository:
    """Mirrors PhotoRepository against a plain list of transient rows."""

    def __init__(self, aircraft_ids=()):
        self.aircraft_ids: set[uuid.UUID] = set(aircraft_ids)
        self.rows: list[AircraftPhoto] = []
        self.fail_insert_containing: set[str] = set()
        self._clock = datetime(2025, 1, 1, tzinfo=UTC)

    def _tick(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    def _for(self, aircraft_id):
        return [p for p in self.rows if p.aircraft_id == aircraft_id]

    async def aircraft_exists(self, aircraft_id):
        return aircraft_id in self.aircraft_ids

    async def list_for_aircraft(self, aircraft_id):
        return sorted(self._for(aircraft_id), key=lambda p: (p.display_order, p.created_at))

    async def count_for_aircraft(self, aircraft_id):
        return len(self._for(aircraft_id))

    async def get(self, aircraft_id, photo_id):
        for photo in self._for(aircraft_id):
            if photo.id == photo_id:
                return photo
        return None

    async def insert(
        self, aircraft_id, storage_path, display_order, is_primary, alt_text="", caption=None
    ):
        if any(fragment in storage_path for fragment in self.fail_insert_containing):
            raise PhotoPersistException(f"Could not save photo record: {storage_path}")
        if any(p.storage_path == storage_path for p in self.rows):
            raise PhotoPersistException(f"Could not save photo record: {storage_path}")
        if is_primary and any(p.is_primary for p in self._for(aircraft_id)):
            raise PhotoPersistException("Second primary photo")
        photo = AircraftPhoto(
            id=uuid.uuid4(),
            aircraft_id=aircraft_id,
            storage_path=storage_path,
            alt_text=alt_text,
            caption=caption,
            display_order=display_order,
            is_primary=is_primary,
            created_at=self._tick(),
        )
        self.rows.append(photo)
        return photo

    async def delete(self, photo):
        self.rows.remove(photo)

    async def apply_order(self, aircraft_id, ordered_ids):
        by_id = {p.id: p for p in self._for(aircraft_id)}
        for photo in by_id.values():
            photo.is_primary = False
        for index, photo_id in enumerate(ordered_ids):
            by_id[photo_id].display_order = index
            by_id[photo_id].is_primary = index == 0

    async def set_primary(self, aircraft_id, photo_id):
        for photo in self._for(aircraft_id):
            photo.is_primary = photo.id == photo_id

    async def update_details(self, photo, alt_text=None, caption=None):
        if alt_text is not None:
            photo.alt_text = alt_text
        if caption is not None:
            photo.caption = caption
        return photo


@pytest.fixture
def aircraft_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture
def photo_store() -> InMemoryPhotoStore:
    return InMemoryPhotoStore()


@pytest.fixture
def photo_repository(aircraft_id) -> InMemoryPhotoRepository:
    return InMemoryPhotoRepository(aircraft_ids=[aircraft_id])
