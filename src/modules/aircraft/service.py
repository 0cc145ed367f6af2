"""Aircraft listing service: CRUD, slug generation, public search."""

from __future__ import annotations

import logging
import re
import uuid

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.exceptions import ConflictException, NotFoundException
from src.models.aircraft import Aircraft
from src.models.enums import AircraftStatus
from src.modules.aircraft.constants import SLUG_MAX_LENGTH
from src.modules.aircraft.schemas import AircraftCreate, AircraftSearchFilters, AircraftUpdate

logger = logging.getLogger(__name__)


def generate_slug(title: str, year: int, make: str, model: str) -> str:
    """``{year}-{make}-{model}-{title}`` lower-cased and URL-safe."""
    slug = f"{year}-{make}-{model}-{title}".lower()
    slug = re.sub(r"[^\w\s-]", "", slug, flags=re.ASCII)
    slug = re.sub(r"[\s_]+", "-", slug)
    slug = re.sub(r"-+", "-", slug).strip("-")
    return slug[:SLUG_MAX_LENGTH].rstrip("-")


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class AircraftService:
    def __init__(self, db: AsyncSession):
        self.db = db

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _unique_slug(self, base: str) -> str:
        """Return ``base`` or ``base-N`` with the lowest N not yet taken."""
        result = await self.db.execute(
            select(Aircraft.slug).where(
                or_(Aircraft.slug == base, Aircraft.slug.like(f"{_escape_like(base)}-%", escape="\\"))
            )
        )
        taken = set(result.scalars().all())
        if base not in taken:
            return base
        suffix = 2
        while f"{base}-{suffix}" in taken:
            suffix += 1
        return f"{base}-{suffix}"

    async def _get(self, aircraft_id: uuid.UUID, with_photos: bool = False) -> Aircraft:
        stmt = select(Aircraft).where(
            Aircraft.id == aircraft_id, Aircraft.status != AircraftStatus.DELETED.value
        )
        if with_photos:
            stmt = stmt.options(selectinload(Aircraft.photos)).execution_options(
                populate_existing=True
            )
        result = await self.db.execute(stmt)
        aircraft = result.scalar_one_or_none()
        if aircraft is None:
            raise NotFoundException(f"Aircraft {aircraft_id} not found")
        return aircraft

    # ------------------------------------------------------------------
    # Admin
    # ------------------------------------------------------------------

    async def create(self, data: AircraftCreate, user_id: uuid.UUID) -> Aircraft:
        slug = await self._unique_slug(generate_slug(data.title, data.year, data.make, data.model))
        fields = data.model_dump()
        fields["status"] = data.status.value
        aircraft = Aircraft(**fields, slug=slug, user_id=user_id)
        self.db.add(aircraft)
        await self.db.flush()
        await self.db.refresh(aircraft)
        logger.info("Created aircraft %s (%s) status=%s", aircraft.id, slug, aircraft.status)
        return aircraft

    async def get(self, aircraft_id: uuid.UUID) -> Aircraft:
        return await self._get(aircraft_id, with_photos=True)

    async def update(self, aircraft_id: uuid.UUID, data: AircraftUpdate) -> Aircraft:
        """Partial update; the slug only changes when one is sent explicitly."""
        aircraft = await self._get(aircraft_id)
        changes = data.model_dump(exclude_unset=True)

        new_slug = changes.pop("slug", None)
        if new_slug and new_slug != aircraft.slug:
            result = await self.db.execute(
                select(Aircraft.id).where(Aircraft.slug == new_slug, Aircraft.id != aircraft_id)
            )
            if result.scalar_one_or_none() is not None:
                raise ConflictException(f"Slug '{new_slug}' is already in use")
            aircraft.slug = new_slug

        for key, value in changes.items():
            if key == "status" and value is not None:
                value = value.value
            setattr(aircraft, key, value)

        await self.db.flush()
        return await self._get(aircraft_id, with_photos=True)

    async def delete(self, aircraft_id: uuid.UUID) -> Aircraft:
        """Soft delete: the row and its photos stay, the listing disappears."""
        aircraft = await self._get(aircraft_id)
        aircraft.status = AircraftStatus.DELETED.value
        await self.db.flush()
        await self.db.refresh(aircraft)
        logger.info("Soft-deleted aircraft %s", aircraft_id)
        return aircraft

    async def list_admin(self) -> list[Aircraft]:
        """Every listing except deleted ones, newest first, with photos."""
        result = await self.db.execute(
            select(Aircraft)
            .options(selectinload(Aircraft.photos))
            .where(Aircraft.status != AircraftStatus.DELETED.value)
            .order_by(Aircraft.created_at.desc())
        )
        return list(result.scalars().all())

    # ------------------------------------------------------------------
    # Public
    # ------------------------------------------------------------------

    async def get_by_slug(self, slug: str) -> Aircraft:
        result = await self.db.execute(
            select(Aircraft)
            .options(selectinload(Aircraft.photos))
            .where(Aircraft.slug == slug, Aircraft.status == AircraftStatus.ACTIVE.value)
        )
        aircraft = result.scalar_one_or_none()
        if aircraft is None:
            raise NotFoundException(f"Aircraft '{slug}' not found")
        return aircraft

    async def search(
        self, filters: AircraftSearchFilters, page: int = 1, limit: int = 20
    ) -> tuple[list[Aircraft], int]:
        """Active listings matching all given filters, newest first."""
        conditions = [Aircraft.status == AircraftStatus.ACTIVE.value]
        if filters.query:
            pattern = f"%{_escape_like(filters.query)}%"
            conditions.append(
                or_(
                    Aircraft.title.ilike(pattern, escape="\\"),
                    Aircraft.description.ilike(pattern, escape="\\"),
                )
            )
        if filters.price_min is not None:
            conditions.append(Aircraft.price >= filters.price_min)
        if filters.price_max is not None:
            conditions.append(Aircraft.price <= filters.price_max)
        if filters.year_min is not None:
            conditions.append(Aircraft.year >= filters.year_min)
        if filters.year_max is not None:
            conditions.append(Aircraft.year <= filters.year_max)
        if filters.make:
            conditions.append(func.lower(Aircraft.make) == filters.make.lower())
        if filters.model:
            conditions.append(func.lower(Aircraft.model) == filters.model.lower())
        if filters.engine_type:
            conditions.append(Aircraft.engine_type.ilike(f"%{_escape_like(filters.engine_type)}%", escape="\\"))

        count_result = await self.db.execute(
            select(func.count()).select_from(Aircraft).where(*conditions)
        )
        total = count_result.scalar_one()

        result = await self.db.execute(
            select(Aircraft)
            .options(selectinload(Aircraft.photos))
            .where(*conditions)
            .order_by(Aircraft.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return list(result.scalars().all()), total
