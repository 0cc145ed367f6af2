"""Listing wizard steps and preview checklist thresholds."""

from __future__ import annotations

import enum


class WizardStep(enum.IntEnum):
    BASIC_INFO = 1
    SPECIFICATIONS = 2
    LOCATION = 3
    PHOTOS = 4
    PREVIEW = 5


STEP_TITLES: dict[WizardStep, str] = {
    WizardStep.BASIC_INFO: "Basic Info",
    WizardStep.SPECIFICATIONS: "Specifications",
    WizardStep.LOCATION: "Location",
    WizardStep.PHOTOS: "Photos",
    WizardStep.PREVIEW: "Preview",
}

FIRST_STEP = WizardStep.BASIC_INFO
LAST_STEP = WizardStep.PREVIEW

MIN_DESCRIPTION_LENGTH = 50

CREATE_LISTING_PATH = "/api/v1/admin/aircraft"
DEFAULT_CLIENT_TIMEOUT_SECONDS = 60.0
