"""Abstract base class for photo/object stores."""

from __future__ import annotations

from abc import ABC, abstractmethod


class StorageError(Exception):
    """A store operation failed (network, permissions, provider error)."""


class ObjectExistsError(StorageError):
    """``put`` was called without ``overwrite`` on a path that already exists."""


class PhotoStore(ABC):
    """Blob storage addressed by opaque path strings within a single bucket."""

    bucket: str

    @abstractmethod
    async def put(
        self, path: str, data: bytes, content_type: str, *, overwrite: bool = False
    ) -> str:
        """Write ``data`` at ``path`` and return the path.

        Raises ObjectExistsError when ``overwrite`` is false and the path is taken.
        """

    @abstractmethod
    async def delete(self, path: str) -> None:
        """Remove the object at ``path``. Deleting a missing object is not an error."""

    @abstractmethod
    def public_url(self, path: str, request_host: str | None = None) -> str:
        """Return the public URL for ``path``; pure, no I/O."""
