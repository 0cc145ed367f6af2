from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.database.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from src.models.aircraft import Aircraft
    from src.models.blog_post import BlogPost


class User(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Profile row mirroring an identity-provider account (same ``id``)."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    company: Mapped[str | None] = mapped_column(String(200))
    phone: Mapped[str | None] = mapped_column(String(40))
    location: Mapped[str | None] = mapped_column(String(200))
    role: Mapped[str] = mapped_column(String(20), server_default="user", nullable=False)

    # Relationships
    aircraft: Mapped[list[Aircraft]] = relationship("Aircraft", back_populates="user")
    blog_posts: Mapped[list[BlogPost]] = relationship("BlogPost", back_populates="author")

    __table_args__ = (Index("ix_users_role", "role"),)
