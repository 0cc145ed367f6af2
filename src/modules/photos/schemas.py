"""Pydantic v2 schemas for the listing photo endpoints."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.models.enums import PhotoFailureKind, PhotoOutcomeStatus


class PhotoResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    aircraft_id: uuid.UUID
    storage_path: str
    alt_text: str = ""
    caption: str | None = None
    display_order: int
    is_primary: bool
    created_at: datetime
    url: str | None = None


class PhotoOutcomeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    index: int
    filename: str
    status: PhotoOutcomeStatus
    error_kind: PhotoFailureKind | None = None
    message: str | None = None
    photo_id: uuid.UUID | None = None


class PhotoBatchResponse(BaseModel):
    """Created photos plus one outcome per submitted file, in submission order."""

    photos: list[PhotoResponse]
    outcomes: list[PhotoOutcomeResponse]
    created: int
    failed: int


class PhotoListResponse(BaseModel):
    photos: list[PhotoResponse]


class PhotoOrderItem(BaseModel):
    id: uuid.UUID
    display_order: int = Field(..., ge=0)


class PhotoReorderRequest(BaseModel):
    photo_orders: list[PhotoOrderItem]


class PhotoUpdateRequest(BaseModel):
    alt_text: str | None = Field(None, max_length=500)
    caption: str | None = Field(None, max_length=1000)
