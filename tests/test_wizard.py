"""Tests for the five-step listing wizard session."""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.exceptions import BusinessRuleException
from src.modules.photos.constants import MAX_PHOTO_BYTES
from src.modules.wizard.client import ApiClientError
from src.modules.wizard.constants import WizardStep
from src.modules.wizard.schemas import CandidatePhoto, SubmissionStatus
from src.modules.wizard.session import ListingWizard


def _photo(name: str = "a.jpg", content_type: str = "image/jpeg", size: int = 8) -> CandidatePhoto:
    return CandidatePhoto(filename=name, content_type=content_type, data=b"x" * size)


def _at_preview(wizard: ListingWizard) -> ListingWizard:
    for _ in range(4):
        wizard.next()
    return wizard


def _client(body: dict | None = None, error: Exception | None = None) -> MagicMock:
    client = MagicMock()
    client.create_listing = AsyncMock(return_value=body, side_effect=error)
    return client


class TestNavigation:
    def test_starts_at_basic_info(self):
        wizard = ListingWizard()
        assert wizard.step == WizardStep.BASIC_INFO
        assert wizard.step_title == "Basic Info"

    def test_next_and_prev_are_bounded(self):
        wizard = ListingWizard()
        assert wizard.prev() == WizardStep.BASIC_INFO
        for _ in range(10):
            wizard.next()
        assert wizard.step == WizardStep.PREVIEW
        assert wizard.prev() == WizardStep.PHOTOS

    def test_fields_survive_navigation(self):
        wizard = ListingWizard()
        wizard.update(title="1978 Piper Archer II")
        wizard.next()
        wizard.prev()
        assert wizard.fields.title == "1978 Piper Archer II"


class TestFields:
    def test_partial_update_merges(self):
        wizard = ListingWizard()
        wizard.update(make="Piper")
        wizard.update(model="Archer")
        assert (wizard.fields.make, wizard.fields.model) == ("Piper", "Archer")

    def test_unknown_field(self):
        with pytest.raises(ValueError, match="colour"):
            ListingWizard().update(colour="red")

    def test_payload_uses_nulls_and_status(self):
        wizard = ListingWizard()
        wizard.update(title="Archer", price=Decimal("95000.50"), make="Piper", model="Archer")

        draft = wizard.build_payload(publish_now=False)
        published = wizard.build_payload(publish_now=True)

        assert draft["status"] == "draft"
        assert published["status"] == "active"
        assert draft["price"] == "95000.50"
        assert draft["engine_type"] is None
        assert draft["title"] == "Archer"


class TestPhotos:
    def test_invalid_candidates_are_rejected_individually(self):
        wizard = ListingWizard()

        rejections = wizard.add_photos(
            [_photo("a.jpg"), _photo("b.gif", "image/gif"), _photo("c.png", "image/png", MAX_PHOTO_BYTES + 1), _photo("d.webp", "image/webp")]
        )

        assert [p.filename for p in wizard.photos] == ["a.jpg", "d.webp"]
        assert [(r.index, r.reason) for r in rejections] == [(1, "UNSUPPORTED_TYPE"), (2, "TOO_LARGE")]

    def test_reorder_and_remove(self):
        wizard = ListingWizard()
        wizard.add_photos([_photo("a.jpg"), _photo("b.jpg"), _photo("c.jpg")])

        wizard.move_photo(2, 0)
        removed = wizard.remove_photo(1)

        assert removed.filename == "a.jpg"
        assert [p.filename for p in wizard.photos] == ["c.jpg", "b.jpg"]

    def test_clear(self):
        wizard = ListingWizard()
        wizard.add_photos([_photo()])
        wizard.clear_photos()
        assert wizard.photos == ()


class TestChecklist:
    def test_empty_listing_misses_most_items(self):
        missing = ListingWizard().missing_recommended()
        assert "Aircraft title provided" in missing
        assert "At least one photo uploaded" in missing
        # Year defaults to the current year
        assert "Year specified" not in missing

    def test_description_must_exceed_threshold(self):
        wizard = ListingWizard()
        wizard.update(description="x" * 50)
        assert "Detailed description (50+ characters)" in wizard.missing_recommended()
        wizard.update(description="x" * 51)
        assert "Detailed description (50+ characters)" not in wizard.missing_recommended()

    def test_complete_listing(self):
        wizard = ListingWizard()
        wizard.update(
            title="1978 Piper Archer II",
            description="y" * 80,
            price=Decimal("95000"),
            make="Piper",
            model="PA-28-181",
            engine_type="Lycoming O-360",
            avionics="GTN 650",
            airport_code="KPAO",
            city="Palo Alto",
        )
        wizard.add_photos([_photo()])
        assert wizard.missing_recommended() == []


class TestSubmit:
    @pytest.mark.asyncio
    async def test_only_from_preview(self):
        wizard = ListingWizard()
        client = _client({"aircraft": {}})

        with pytest.raises(BusinessRuleException):
            await wizard.submit(client)

        client.create_listing.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_incomplete_listing_is_still_submitted(self):
        wizard = _at_preview(ListingWizard())
        client = _client({"aircraft": {"id": "1"}, "photos": [], "outcomes": []})

        result = await wizard.submit(client)

        assert result.status == SubmissionStatus.DRAFT
        client.create_listing.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_success_resets_session(self):
        wizard = ListingWizard()
        wizard.update(title="1978 Piper Archer II")
        wizard.add_photos([_photo("a.jpg"), _photo("b.jpg")])
        _at_preview(wizard)
        body = {
            "aircraft": {"id": "abc"},
            "photos": [{"id": "p1"}],
            "outcomes": [{"index": 0, "status": "CREATED"}, {"index": 1, "status": "FAILED", "error_kind": "UPLOAD"}],
        }
        client = _client(body)

        result = await wizard.submit(client, publish_now=True)

        payload, photos = client.create_listing.await_args.args
        assert payload["status"] == "active"
        assert [p.filename for p in photos] == ["a.jpg", "b.jpg"]
        assert result.status == SubmissionStatus.PUBLISHED
        assert len(result.failed_photos) == 1
        assert wizard.step == WizardStep.BASIC_INFO
        assert wizard.fields.title == ""
        assert wizard.photos == ()

    @pytest.mark.asyncio
    async def test_failure_keeps_state(self):
        wizard = ListingWizard()
        wizard.update(title="1978 Piper Archer II")
        wizard.add_photos([_photo()])
        _at_preview(wizard)
        client = _client(error=ApiClientError("Validation failed", status_code=422))

        with pytest.raises(ApiClientError):
            await wizard.submit(client)

        assert wizard.step == WizardStep.PREVIEW
        assert wizard.fields.title == "1978 Piper Archer II"
        assert len(wizard.photos) == 1

        # A retry is allowed after the failure
        client.create_listing = AsyncMock(return_value={"aircraft": {"id": "x"}})
        result = await wizard.submit(client)
        assert result.aircraft == {"id": "x"}
