"""Listing wizard: five-step client-side session ending in one create request.

Nothing is sent to the server until ``submit``; candidate photos and field
values live only in this object and are discarded after a successful submit.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable
from decimal import Decimal
from typing import Any

from src.exceptions import BusinessRuleException, PhotoValidationException
from src.modules.photos.ordering import move_item
from src.modules.photos.validation import validate_photo
from src.modules.wizard.client import AdminApiClient
from src.modules.wizard.constants import (
    FIRST_STEP,
    LAST_STEP,
    MIN_DESCRIPTION_LENGTH,
    STEP_TITLES,
    WizardStep,
)
from src.modules.wizard.schemas import (
    CandidatePhoto,
    ChecklistItem,
    ListingFields,
    PhotoRejection,
    SubmissionResult,
    SubmissionStatus,
)

logger = logging.getLogger(__name__)

_FIELD_NAMES = frozenset(f.name for f in dataclasses.fields(ListingFields))


class ListingWizard:
    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self._step = FIRST_STEP
        self.fields = ListingFields()
        self._photos: list[CandidatePhoto] = []
        self._submitting = False

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    @property
    def step(self) -> WizardStep:
        return self._step

    @property
    def step_title(self) -> str:
        return STEP_TITLES[self._step]

    def next(self) -> WizardStep:
        if self._step < LAST_STEP:
            self._step = WizardStep(self._step + 1)
        return self._step

    def prev(self) -> WizardStep:
        if self._step > FIRST_STEP:
            self._step = WizardStep(self._step - 1)
        return self._step

    # ------------------------------------------------------------------
    # Fields
    # ------------------------------------------------------------------

    def update(self, **changes: Any) -> ListingFields:
        """Merge a partial update into the field record."""
        unknown = set(changes) - _FIELD_NAMES
        if unknown:
            raise ValueError(f"Unknown listing fields: {', '.join(sorted(unknown))}")
        self.fields = dataclasses.replace(self.fields, **changes)
        return self.fields

    # ------------------------------------------------------------------
    # Candidate photos
    # ------------------------------------------------------------------

    @property
    def photos(self) -> tuple[CandidatePhoto, ...]:
        return tuple(self._photos)

    def add_photos(self, candidates: Iterable[CandidatePhoto]) -> list[PhotoRejection]:
        """Queue valid files in order; return one rejection per invalid file."""
        rejections: list[PhotoRejection] = []
        for index, candidate in enumerate(candidates):
            try:
                validate_photo(candidate.content_type, candidate.size)
            except PhotoValidationException as exc:
                rejections.append(
                    PhotoRejection(
                        index=index,
                        filename=candidate.filename,
                        reason=exc.reason,
                        message=exc.message,
                    )
                )
                continue
            self._photos.append(candidate)
        return rejections

    def remove_photo(self, index: int) -> CandidatePhoto:
        return self._photos.pop(index)

    def move_photo(self, from_index: int, to_index: int) -> tuple[CandidatePhoto, ...]:
        self._photos = move_item(self._photos, from_index, to_index)
        return self.photos

    def clear_photos(self) -> None:
        self._photos = []

    # ------------------------------------------------------------------
    # Preview
    # ------------------------------------------------------------------

    def checklist(self) -> list[ChecklistItem]:
        """Advisory pre-publish checks; never blocks submission."""
        f = self.fields
        return [
            ChecklistItem("Aircraft title provided", bool(f.title.strip())),
            ChecklistItem(
                f"Detailed description ({MIN_DESCRIPTION_LENGTH}+ characters)",
                len(f.description) > MIN_DESCRIPTION_LENGTH,
            ),
            ChecklistItem("Price set", f.price > 0),
            ChecklistItem("Make and model specified", bool(f.make and f.model)),
            ChecklistItem("Year specified", bool(f.year)),
            ChecklistItem("Engine type selected", bool(f.engine_type)),
            ChecklistItem("Avionics specified", bool(f.avionics)),
            ChecklistItem("Location provided", bool(f.airport_code and f.city)),
            ChecklistItem("At least one photo uploaded", bool(self._photos)),
        ]

    def missing_recommended(self) -> list[str]:
        return [item.label for item in self.checklist() if not item.ok]

    def build_payload(self, publish_now: bool) -> dict[str, Any]:
        payload = dataclasses.asdict(self.fields)
        for key, value in payload.items():
            if isinstance(value, Decimal):
                payload[key] = str(value)
        # Optional text fields go out as null rather than ""
        for key in ("engine_type", "avionics", "airport_code", "city", "country", "description"):
            if payload[key] == "":
                payload[key] = None
        payload["status"] = "active" if publish_now else "draft"
        return payload

    # ------------------------------------------------------------------
    # Submit
    # ------------------------------------------------------------------

    async def submit(self, client: AdminApiClient, publish_now: bool = False) -> SubmissionResult:
        """Send the listing (and queued photos) in one request.

        Only a failure to create the listing raises; photo failures come back
        as outcomes on the result. The session is reset after success.
        """
        if self._step != WizardStep.PREVIEW:
            raise BusinessRuleException("The listing can only be submitted from the preview step")
        if self._submitting:
            raise BusinessRuleException("A submission is already in progress")

        self._submitting = True
        try:
            body = await client.create_listing(self.build_payload(publish_now), self._photos)
        finally:
            self._submitting = False

        result = SubmissionResult(
            status=SubmissionStatus.PUBLISHED if publish_now else SubmissionStatus.DRAFT,
            aircraft=body["aircraft"],
            photos=body.get("photos", []),
            outcomes=body.get("outcomes", []),
        )
        if result.failed_photos:
            logger.warning(
                "Listing %s created with %d failed photo(s)",
                result.aircraft.get("id"),
                len(result.failed_photos),
            )
        self.reset()
        return result
