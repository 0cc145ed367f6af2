"""Pydantic v2 schemas for aircraft listing endpoints."""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from src.models.enums import AircraftStatus
from src.modules.aircraft.constants import EDITABLE_STATUSES, MIN_YEAR
from src.modules.photos.schemas import PhotoOutcomeResponse, PhotoResponse


def _check_editable_status(value: AircraftStatus) -> AircraftStatus:
    if value not in EDITABLE_STATUSES:
        raise ValueError(f"Status '{value.value}' cannot be set directly")
    return value


EditableStatus = Annotated[AircraftStatus, AfterValidator(_check_editable_status)]


class AircraftCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    price: Decimal = Field(..., ge=0)
    year: int = Field(..., ge=MIN_YEAR, le=2100)
    make: str = Field(..., min_length=1, max_length=100)
    model: str = Field(..., min_length=1, max_length=100)
    hours: int | None = Field(None, ge=0)
    engine_type: str | None = Field(None, max_length=200)
    avionics: str | None = None
    airport_code: str | None = Field(None, max_length=10)
    city: str | None = Field(None, max_length=100)
    country: str | None = Field(None, max_length=100)
    latitude: Decimal | None = Field(None, ge=-90, le=90)
    longitude: Decimal | None = Field(None, ge=-180, le=180)
    meta_description: str | None = Field(None, max_length=320)
    status: EditableStatus = AircraftStatus.DRAFT


class AircraftCreateRequest(BaseModel):
    """JSON body of the create endpoint; multipart sends ``aircraft`` as a JSON string."""

    aircraft: AircraftCreate


class AircraftUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    price: Decimal | None = Field(None, ge=0)
    year: int | None = Field(None, ge=MIN_YEAR, le=2100)
    make: str | None = Field(None, min_length=1, max_length=100)
    model: str | None = Field(None, min_length=1, max_length=100)
    hours: int | None = Field(None, ge=0)
    engine_type: str | None = Field(None, max_length=200)
    avionics: str | None = None
    airport_code: str | None = Field(None, max_length=10)
    city: str | None = Field(None, max_length=100)
    country: str | None = Field(None, max_length=100)
    latitude: Decimal | None = Field(None, ge=-90, le=90)
    longitude: Decimal | None = Field(None, ge=-180, le=180)
    meta_description: str | None = Field(None, max_length=320)
    status: EditableStatus | None = None
    slug: str | None = Field(None, min_length=1, max_length=255, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


class AircraftResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    description: str | None = None
    price: Decimal
    year: int
    make: str
    model: str
    hours: int | None = None
    engine_type: str | None = None
    avionics: str | None = None
    airport_code: str | None = None
    city: str | None = None
    country: str | None = None
    latitude: Decimal | None = None
    longitude: Decimal | None = None
    status: AircraftStatus
    slug: str
    meta_description: str | None = None
    user_id: uuid.UUID
    created_at: datetime
    updated_at: datetime
    photos: list[PhotoResponse] = []
    primary_photo_url: str | None = None


class AircraftCreateResponse(BaseModel):
    """The new listing plus the result of each attached photo."""

    aircraft: AircraftResponse
    photos: list[PhotoResponse] = []
    outcomes: list[PhotoOutcomeResponse] = []


class AircraftListResponse(BaseModel):
    aircraft: list[AircraftResponse]
    total: int


class AircraftSearchFilters(BaseModel):
    query: str | None = Field(None, max_length=200)
    price_min: Decimal | None = Field(None, ge=0)
    price_max: Decimal | None = Field(None, ge=0)
    year_min: int | None = None
    year_max: int | None = None
    make: str | None = None
    model: str | None = None
    engine_type: str | None = None


class AircraftSearchResponse(BaseModel):
    items: list[AircraftResponse]
    total: int
    page: int
    limit: int
