"""Client-side value types for the listing wizard and photo editor."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any


class SubmissionStatus(str, enum.Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


@dataclass(frozen=True)
class CandidatePhoto:
    """A file queued in the wizard; it has no identity until the server stores it."""

    filename: str
    content_type: str
    data: bytes
    alt_text: str = ""
    caption: str | None = None

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class PhotoRejection:
    index: int
    filename: str
    reason: str
    message: str


@dataclass
class ListingFields:
    title: str = ""
    description: str = ""
    price: Decimal = Decimal("0")
    year: int = field(default_factory=lambda: date.today().year)
    make: str = ""
    model: str = ""
    hours: int = 0
    engine_type: str = ""
    avionics: str = ""
    airport_code: str = ""
    city: str = ""
    country: str = ""
    latitude: Decimal | None = None
    longitude: Decimal | None = None
    meta_description: str | None = None
    status: str = "draft"


@dataclass(frozen=True)
class ChecklistItem:
    label: str
    ok: bool


@dataclass
class SubmissionResult:
    status: SubmissionStatus
    aircraft: dict[str, Any]
    photos: list[dict[str, Any]] = field(default_factory=list)
    outcomes: list[dict[str, Any]] = field(default_factory=list)

    @property
    def failed_photos(self) -> list[dict[str, Any]]:
        return [o for o in self.outcomes if o.get("status") == "FAILED"]
