"""Store factory: one cached store per bucket, backend chosen by settings."""

from __future__ import annotations

from src.config import settings
from src.modules.storage.base import PhotoStore

_instances: dict[str, PhotoStore] = {}


def get_store(bucket: str) -> PhotoStore:
    if bucket not in _instances:
        if settings.storage_backend == "s3":
            from src.modules.storage.s3 import S3PhotoStore

            _instances[bucket] = S3PhotoStore(bucket)
        elif settings.storage_backend == "filesystem":
            from src.modules.storage.filesystem import FilesystemPhotoStore

            _instances[bucket] = FilesystemPhotoStore(bucket)
        else:
            raise ValueError(f"No store for backend: {settings.storage_backend}")
    return _instances[bucket]


def get_aircraft_photo_store() -> PhotoStore:
    """FastAPI dependency: the store holding listing photos."""
    return get_store(settings.aircraft_photos_bucket)


def get_blog_image_store() -> PhotoStore:
    """FastAPI dependency: the store holding blog header images."""
    return get_store(settings.blog_images_bucket)
