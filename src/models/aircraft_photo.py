"""AircraftPhoto model: ordered photo rows for a listing, one blob each."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Text, func, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.database.base import Base, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from src.models.aircraft import Aircraft


class AircraftPhoto(UUIDPrimaryKeyMixin, Base):
    __tablename__ = "aircraft_photos"

    aircraft_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("aircraft.id", ondelete="CASCADE"),
        nullable=False,
    )
    storage_path: Mapped[str] = mapped_column(String(500), unique=True, nullable=False)
    alt_text: Mapped[str] = mapped_column(Text, server_default="", nullable=False)
    caption: Mapped[str | None] = mapped_column(Text)
    display_order: Mapped[int] = mapped_column(Integer, server_default="0", nullable=False)
    is_primary: Mapped[bool] = mapped_column(Boolean, server_default="false", nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    # Relationships
    aircraft: Mapped[Aircraft] = relationship(
        "Aircraft", back_populates="photos", lazy="noload"
    )

    __table_args__ = (
        Index("ix_aircraft_photos_aircraft_order", "aircraft_id", "display_order"),
        # At most one primary photo per aircraft
        Index(
            "uq_aircraft_photos_primary",
            "aircraft_id",
            unique=True,
            postgresql_where=text("is_primary"),
        ),
    )
