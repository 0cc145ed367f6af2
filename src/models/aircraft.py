from __future__ import annotations

import uuid
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.database.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from src.models.aircraft_photo import AircraftPhoto
    from src.models.user import User


class Aircraft(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "aircraft"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    make: Mapped[str] = mapped_column(String(100), nullable=False)
    model: Mapped[str] = mapped_column(String(100), nullable=False)
    hours: Mapped[int | None] = mapped_column(Integer)
    engine_type: Mapped[str | None] = mapped_column(String(200))
    avionics: Mapped[str | None] = mapped_column(Text)

    # Location
    airport_code: Mapped[str | None] = mapped_column(String(10))
    city: Mapped[str | None] = mapped_column(String(100))
    country: Mapped[str | None] = mapped_column(String(100))
    latitude: Mapped[Decimal | None] = mapped_column(Numeric(10, 8))
    longitude: Mapped[Decimal | None] = mapped_column(Numeric(11, 8))

    # draft | active | sold | deleted
    status: Mapped[str] = mapped_column(String(20), server_default="draft", nullable=False)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    meta_description: Mapped[str | None] = mapped_column(String(320))

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    # Relationships
    user: Mapped[User] = relationship("User", back_populates="aircraft", lazy="noload")
    photos: Mapped[list[AircraftPhoto]] = relationship(
        "AircraftPhoto",
        back_populates="aircraft",
        cascade="all, delete-orphan",
        order_by="(AircraftPhoto.display_order, AircraftPhoto.created_at)",
        lazy="noload",
    )

    __table_args__ = (
        Index("ix_aircraft_status", "status"),
        Index("ix_aircraft_make_model", "make", "model"),
        Index("ix_aircraft_user_id", "user_id"),
    )
