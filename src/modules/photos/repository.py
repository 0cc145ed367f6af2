"""Data access for the ``aircraft_photos`` table."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.exceptions import PhotoPersistException
from src.models.aircraft import Aircraft
from src.models.aircraft_photo import AircraftPhoto

logger = logging.getLogger(__name__)


class PhotoRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def aircraft_exists(self, aircraft_id: uuid.UUID) -> bool:
        result = await self.db.execute(select(Aircraft.id).where(Aircraft.id == aircraft_id))
        return result.scalar_one_or_none() is not None

    async def list_for_aircraft(self, aircraft_id: uuid.UUID) -> list[AircraftPhoto]:
        result = await self.db.execute(
            select(AircraftPhoto)
            .where(AircraftPhoto.aircraft_id == aircraft_id)
            .order_by(AircraftPhoto.display_order, AircraftPhoto.created_at)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def count_for_aircraft(self, aircraft_id: uuid.UUID) -> int:
        result = await self.db.execute(
            select(func.count()).select_from(AircraftPhoto).where(
                AircraftPhoto.aircraft_id == aircraft_id
            )
        )
        return result.scalar_one()

    async def get(self, aircraft_id: uuid.UUID, photo_id: uuid.UUID) -> AircraftPhoto | None:
        result = await self.db.execute(
            select(AircraftPhoto).where(
                AircraftPhoto.id == photo_id,
                AircraftPhoto.aircraft_id == aircraft_id,
            )
        )
        return result.scalar_one_or_none()

    async def insert(
        self,
        aircraft_id: uuid.UUID,
        storage_path: str,
        display_order: int,
        is_primary: bool,
        alt_text: str = "",
        caption: str | None = None,
    ) -> AircraftPhoto:
        """Insert one row inside a SAVEPOINT so a failure leaves the session usable."""
        photo = AircraftPhoto(
            aircraft_id=aircraft_id,
            storage_path=storage_path,
            alt_text=alt_text,
            caption=caption,
            display_order=display_order,
            is_primary=is_primary,
        )
        try:
            async with self.db.begin_nested():
                self.db.add(photo)
                await self.db.flush()
            await self.db.refresh(photo)
        except SQLAlchemyError as exc:
            logger.warning("Insert failed for photo %s: %s", storage_path, exc)
            raise PhotoPersistException(f"Could not save photo record: {storage_path}") from exc
        return photo

    async def delete(self, photo: AircraftPhoto) -> None:
        await self.db.delete(photo)
        await self.db.flush()

    async def _clear_primary(self, aircraft_id: uuid.UUID) -> None:
        await self.db.execute(
            update(AircraftPhoto)
            .where(AircraftPhoto.aircraft_id == aircraft_id, AircraftPhoto.is_primary.is_(True))
            .values(is_primary=False)
        )

    async def apply_order(self, aircraft_id: uuid.UUID, ordered_ids: list[uuid.UUID]) -> None:
        """Rank photos by list position; the first one becomes primary.

        Flags are cleared before any is set so the one-primary index never sees two.
        """
        await self._clear_primary(aircraft_id)
        for index, photo_id in enumerate(ordered_ids):
            await self.db.execute(
                update(AircraftPhoto)
                .where(AircraftPhoto.id == photo_id, AircraftPhoto.aircraft_id == aircraft_id)
                .values(display_order=index, is_primary=index == 0)
            )
        await self.db.flush()

    async def set_primary(self, aircraft_id: uuid.UUID, photo_id: uuid.UUID) -> None:
        await self._clear_primary(aircraft_id)
        await self.db.execute(
            update(AircraftPhoto)
            .where(AircraftPhoto.id == photo_id, AircraftPhoto.aircraft_id == aircraft_id)
            .values(is_primary=True)
        )
        await self.db.flush()

    async def update_details(
        self, photo: AircraftPhoto, alt_text: str | None = None, caption: str | None = None
    ) -> AircraftPhoto:
        if alt_text is not None:
            photo.alt_text = alt_text
        if caption is not None:
            photo.caption = caption
        await self.db.flush()
        return photo
