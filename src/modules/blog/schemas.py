"""Pydantic v2 schemas for blog endpoints."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

_SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


class BlogPostCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    slug: str = Field(..., min_length=1, max_length=255, pattern=_SLUG_PATTERN)
    blurb: str | None = None
    content: str | None = None
    header_photo: str | None = Field(None, max_length=500)
    meta_description: str | None = Field(None, max_length=320)
    published: bool = False


class BlogPostUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=200)
    slug: str | None = Field(None, min_length=1, max_length=255, pattern=_SLUG_PATTERN)
    blurb: str | None = None
    content: str | None = None
    header_photo: str | None = Field(None, max_length=500)
    meta_description: str | None = Field(None, max_length=320)
    published: bool | None = None


class BlogPostResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    slug: str
    blurb: str | None = None
    content: str | None = None
    header_photo: str | None = None
    header_photo_url: str | None = None
    meta_description: str | None = None
    published: bool
    published_at: datetime | None = None
    author_id: uuid.UUID
    created_at: datetime
    updated_at: datetime


class BlogPostListResponse(BaseModel):
    posts: list[BlogPostResponse]
    total: int
    page: int
    limit: int


class BlogImageResponse(BaseModel):
    storage_path: str
    alt_text: str
    public_url: str
