"""Photo editor for an existing listing: optimistic reorder against the admin API."""

from __future__ import annotations

import uuid
from typing import Any

from src.modules.photos.ordering import OptimisticOrder
from src.modules.wizard.client import AdminApiClient


class PhotoEditor:
    """Displayed photo order for one listing.

    Moves show up immediately; if the server rejects the new order the
    previous order is restored and the error propagates.
    """

    def __init__(self, client: AdminApiClient, aircraft_id: uuid.UUID | str):
        self.client = client
        self.aircraft_id = aircraft_id
        self.order: OptimisticOrder[dict[str, Any]] = OptimisticOrder([])

    @property
    def photos(self) -> tuple[dict[str, Any], ...]:
        return self.order.items

    @property
    def primary(self) -> dict[str, Any] | None:
        for photo in self.photos:
            if photo.get("is_primary"):
                return photo
        return self.photos[0] if self.photos else None

    async def load(self) -> tuple[dict[str, Any], ...]:
        self.order.replace(await self.client.list_photos(self.aircraft_id))
        return self.photos

    async def _commit(self, photos: list[dict[str, Any]]) -> list[dict[str, Any]]:
        return await self.client.reorder_photos(self.aircraft_id, [p["id"] for p in photos])

    async def move(self, from_index: int, to_index: int) -> tuple[dict[str, Any], ...]:
        return await self.order.move(from_index, to_index, self._commit)

    async def delete(self, photo_id: uuid.UUID | str) -> tuple[dict[str, Any], ...]:
        self.order.replace(await self.client.delete_photo(self.aircraft_id, photo_id))
        return self.photos

    async def set_primary(self, photo_id: uuid.UUID | str) -> tuple[dict[str, Any], ...]:
        self.order.replace(await self.client.set_primary_photo(self.aircraft_id, photo_id))
        return self.photos
