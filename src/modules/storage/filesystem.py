"""Local filesystem photo store for development without an object store."""

from __future__ import annotations

import logging
from pathlib import Path

import aiofiles
import aiofiles.os

from src.config import settings
from src.modules.storage.base import ObjectExistsError, PhotoStore, StorageError
from src.modules.storage.urls import build_public_url

logger = logging.getLogger(__name__)


class FilesystemPhotoStore(PhotoStore):
    def __init__(
        self, bucket: str, root: str | Path | None = None, public_base_url: str | None = None
    ) -> None:
        self.bucket = bucket
        self.root = Path(root or settings.storage_local_root).resolve()
        self.public_base_url = public_base_url or settings.storage_public_base_url

    def _resolve(self, path: str) -> Path:
        bucket_root = self.root / self.bucket
        target = (bucket_root / path).resolve()
        if bucket_root.resolve() not in target.parents:
            raise StorageError(f"Path escapes the bucket: {path}")
        return target

    async def put(
        self, path: str, data: bytes, content_type: str, *, overwrite: bool = False
    ) -> str:
        target = self._resolve(path)
        try:
            await aiofiles.os.makedirs(target.parent, exist_ok=True)
            async with aiofiles.open(target, "wb" if overwrite else "xb") as fh:
                await fh.write(data)
        except FileExistsError as exc:
            raise ObjectExistsError(f"Object already exists: {self.bucket}/{path}") from exc
        except OSError as exc:
            logger.error("Local write failed for %s: %s", target, exc)
            raise StorageError(f"Upload failed: {exc}") from exc
        logger.info("Stored %s/%s locally (%d bytes, %s)", self.bucket, path, len(data), content_type)
        return path

    async def delete(self, path: str) -> None:
        target = self._resolve(path)
        try:
            await aiofiles.os.remove(target)
        except FileNotFoundError:
            logger.debug("Local object %s already absent", target)
        except OSError as exc:
            raise StorageError(f"Delete failed for {path}: {exc}") from exc

    def public_url(self, path: str, request_host: str | None = None) -> str:
        return build_public_url(self.public_base_url, self.bucket, path, request_host)
