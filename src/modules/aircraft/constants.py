"""Aircraft listing constants."""

from __future__ import annotations

from src.models.enums import AircraftStatus

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

MIN_YEAR = 1903
SLUG_MAX_LENGTH = 200

# Statuses an admin may set directly; "deleted" is reachable only through DELETE
EDITABLE_STATUSES: set[AircraftStatus] = {
    AircraftStatus.DRAFT,
    AircraftStatus.ACTIVE,
    AircraftStatus.SOLD,
}
