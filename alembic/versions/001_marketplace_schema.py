"""Create marketplace schema - users, aircraft, aircraft_photos, blog_posts

Revision ID: 001
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects.postgresql import UUID

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    ]


def upgrade() -> None:
    op.execute('CREATE EXTENSION IF NOT EXISTS "pgcrypto";')

    # 1. users (mirrors identity-provider accounts)
    op.create_table(
        "users",
        sa.Column("id", UUID(as_uuid=True), server_default=sa.text("gen_random_uuid()"), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("company", sa.String(200), nullable=True),
        sa.Column("phone", sa.String(40), nullable=True),
        sa.Column("location", sa.String(200), nullable=True),
        sa.Column("role", sa.String(20), server_default="user", nullable=False),
        *_timestamps(),
        sa.CheckConstraint("role IN ('user', 'admin')", name="ck_users_role"),
    )
    op.create_index("ix_users_role", "users", ["role"])

    # 2. aircraft
    op.create_table(
        "aircraft",
        sa.Column("id", UUID(as_uuid=True), server_default=sa.text("gen_random_uuid()"), primary_key=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("price", sa.Numeric(12, 2), nullable=False),
        sa.Column("year", sa.Integer, nullable=False),
        sa.Column("make", sa.String(100), nullable=False),
        sa.Column("model", sa.String(100), nullable=False),
        sa.Column("hours", sa.Integer, nullable=True),
        sa.Column("engine_type", sa.String(200), nullable=True),
        sa.Column("avionics", sa.Text, nullable=True),
        sa.Column("airport_code", sa.String(10), nullable=True),
        sa.Column("city", sa.String(100), nullable=True),
        sa.Column("country", sa.String(100), nullable=True),
        sa.Column("latitude", sa.Numeric(10, 8), nullable=True),
        sa.Column("longitude", sa.Numeric(11, 8), nullable=True),
        sa.Column("status", sa.String(20), server_default="draft", nullable=False),
        sa.Column("slug", sa.String(255), nullable=False, unique=True),
        sa.Column("meta_description", sa.String(320), nullable=True),
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('draft', 'active', 'sold', 'deleted')", name="ck_aircraft_status"
        ),
    )
    op.create_index("ix_aircraft_status", "aircraft", ["status"])
    op.create_index("ix_aircraft_make_model", "aircraft", ["make", "model"])
    op.create_index("ix_aircraft_user_id", "aircraft", ["user_id"])

    # 3. aircraft_photos
    op.create_table(
        "aircraft_photos",
        sa.Column("id", UUID(as_uuid=True), server_default=sa.text("gen_random_uuid()"), primary_key=True),
        sa.Column(
            "aircraft_id", UUID(as_uuid=True), sa.ForeignKey("aircraft.id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column("storage_path", sa.String(500), nullable=False, unique=True),
        sa.Column("alt_text", sa.Text, server_default="", nullable=False),
        sa.Column("caption", sa.Text, nullable=True),
        sa.Column("display_order", sa.Integer, server_default="0", nullable=False),
        sa.Column("is_primary", sa.Boolean, server_default="false", nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    )
    op.create_index(
        "ix_aircraft_photos_aircraft_order", "aircraft_photos", ["aircraft_id", "display_order"]
    )
    # At most one primary photo per aircraft
    op.create_index(
        "uq_aircraft_photos_primary",
        "aircraft_photos",
        ["aircraft_id"],
        unique=True,
        postgresql_where=sa.text("is_primary"),
    )

    # 4. blog_posts
    op.create_table(
        "blog_posts",
        sa.Column("id", UUID(as_uuid=True), server_default=sa.text("gen_random_uuid()"), primary_key=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False, unique=True),
        sa.Column("blurb", sa.Text, nullable=True),
        sa.Column("content", sa.Text, nullable=True),
        sa.Column("header_photo", sa.String(500), nullable=True),
        sa.Column("meta_description", sa.String(320), nullable=True),
        sa.Column("published", sa.Boolean, server_default="false", nullable=False),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("author_id", UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_blog_posts_published_at", "blog_posts", ["published", "published_at"])


def downgrade() -> None:
    op.drop_table("blog_posts")
    op.drop_table("aircraft_photos")
    op.drop_table("aircraft")
    op.drop_table("users")
