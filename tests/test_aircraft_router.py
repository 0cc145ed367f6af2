"""Tests for the aircraft routers: create with photos, admin reads, public search."""

from __future__ import annotations

import json
import uuid
from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from src.app import app
from src.database.session import get_db
from src.exceptions import NotFoundException
from src.models.aircraft import Aircraft
from src.modules.auth.auth import AuthenticatedUser
from src.modules.auth.dependencies import require_admin
from src.modules.photos.dependencies import get_photo_manager
from src.modules.photos.manager import PhotoCollectionManager
from src.modules.storage.factory import get_aircraft_photo_store

ADMIN = AuthenticatedUser(id=uuid.uuid4(), email="admin@zuluniner.com")

LISTING = {
    "title": "Clean Skyhawk",
    "price": "89000",
    "year": 1978,
    "make": "Cessna",
    "model": "172N",
}


def _aircraft(aircraft_id: uuid.UUID, **overrides) -> Aircraft:
    now = datetime(2025, 3, 1, tzinfo=UTC)
    fields = dict(
        id=aircraft_id,
        title="Clean Skyhawk",
        price=Decimal("89000"),
        year=1978,
        make="Cessna",
        model="172N",
        status="draft",
        slug="1978-cessna-172n-clean-skyhawk",
        user_id=ADMIN.id,
        created_at=now,
        updated_at=now,
    )
    fields.update(overrides)
    return Aircraft(**fields)


@pytest.fixture
def client(photo_repository, photo_store):
    manager = PhotoCollectionManager(photo_repository, photo_store)

    async def override_get_db():
        yield MagicMock()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[require_admin] = lambda: ADMIN
    app.dependency_overrides[get_photo_manager] = lambda: manager
    app.dependency_overrides[get_aircraft_photo_store] = lambda: photo_store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def service():
    with patch("src.modules.aircraft.router.AircraftService") as service_cls:
        yield service_cls.return_value


class TestCreateAircraft:
    def test_json_body_without_photos(self, client, service, aircraft_id):
        service.create = AsyncMock(return_value=_aircraft(aircraft_id))

        response = client.post("/api/v1/admin/aircraft", json={"aircraft": LISTING})

        assert response.status_code == 201
        body = response.json()
        assert body["aircraft"]["slug"] == "1978-cessna-172n-clean-skyhawk"
        assert body["aircraft"]["photos"] == []
        assert body["outcomes"] == []
        data, user_id = service.create.call_args.args
        assert data.make == "Cessna"
        assert user_id == ADMIN.id

    def test_multipart_with_photos(self, client, service, aircraft_id):
        service.create = AsyncMock(return_value=_aircraft(aircraft_id))
        files = [
            ("photos", ("front.jpg", b"\xff\xd8front", "image/jpeg")),
            ("photos", ("logbook.pdf", b"%PDF", "application/pdf")),
            ("photos", ("panel.png", b"\x89PNG", "image/png")),
        ]

        response = client.post(
            "/api/v1/admin/aircraft", data={"aircraft": json.dumps(LISTING)}, files=files
        )

        assert response.status_code == 201
        body = response.json()
        assert [o["status"] for o in body["outcomes"]] == ["CREATED", "FAILED", "CREATED"]
        assert len(body["photos"]) == 2
        assert len(body["aircraft"]["photos"]) == 2
        assert body["aircraft"]["primary_photo_url"].endswith("-00-front.jpg")

    def test_photos_over_request_limit_fail_per_file(self, client, service, photo_store, aircraft_id):
        service.create = AsyncMock(return_value=_aircraft(aircraft_id))
        app.dependency_overrides[get_photo_manager]().max_files = 20
        files = [("photos", (f"p{i}.jpg", b"\xff\xd8" + bytes([i]), "image/jpeg")) for i in range(21)]

        response = client.post(
            "/api/v1/admin/aircraft", data={"aircraft": json.dumps(LISTING)}, files=files
        )

        assert response.status_code == 201
        service.create.assert_awaited_once()
        outcomes = response.json()["outcomes"]
        assert [o["status"] for o in outcomes] == ["CREATED"] * 20 + ["FAILED"]
        assert outcomes[20]["error_kind"] == "VALIDATION"
        assert outcomes[20]["filename"] == "p20.jpg"
        assert len(photo_store.objects) == 20

    def test_multipart_alt_text_and_caption(self, client, service, aircraft_id):
        service.create = AsyncMock(return_value=_aircraft(aircraft_id))
        files = [
            ("photos", ("wing.jpg", b"\xff\xd8wing", "image/jpeg")),
            ("photos", ("panel.png", b"\x89PNG", "image/png")),
        ]

        response = client.post(
            "/api/v1/admin/aircraft",
            data={
                "aircraft": json.dumps(LISTING),
                "alt_text": ["Left wing", "Panel"],
                "caption": ["", "Garmin G1000"],
            },
            files=files,
        )

        assert response.status_code == 201
        photos = response.json()["photos"]
        assert [p["alt_text"] for p in photos] == ["Left wing", "Panel"]
        assert [p["caption"] for p in photos] == [None, "Garmin G1000"]

    def test_invalid_listing_is_rejected(self, client, service):
        service.create = AsyncMock()

        response = client.post("/api/v1/admin/aircraft", json={"aircraft": {"title": "No price"}})

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert any("price" in d["field"] for d in error["details"])
        service.create.assert_not_called()

    def test_multipart_without_listing_field(self, client, service):
        service.create = AsyncMock()

        response = client.post(
            "/api/v1/admin/aircraft", files=[("photos", ("a.jpg", b"x", "image/jpeg"))]
        )

        assert response.status_code == 422
        assert response.json()["error"]["details"][0]["field"] == "aircraft"

    def test_malformed_json(self, client, service):
        response = client.post(
            "/api/v1/admin/aircraft",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 422


class TestAdminReads:
    def test_get_missing(self, client, service):
        service.get = AsyncMock(side_effect=NotFoundException("Aircraft x not found"))

        response = client.get(f"/api/v1/admin/aircraft/{uuid.uuid4()}")

        assert response.status_code == 404

    def test_delete_returns_soft_deleted_listing(self, client, service, aircraft_id):
        service.delete = AsyncMock(return_value=_aircraft(aircraft_id, status="deleted"))

        response = client.delete(f"/api/v1/admin/aircraft/{aircraft_id}")

        assert response.status_code == 200
        assert response.json()["status"] == "deleted"

    def test_list(self, client, service, aircraft_id):
        service.list_admin = AsyncMock(return_value=[_aircraft(aircraft_id)])

        response = client.get("/api/v1/admin/aircraft")

        assert response.status_code == 200
        assert response.json()["total"] == 1


class TestPublicSearch:
    def test_search_passes_filters(self, client, service, aircraft_id):
        service.search = AsyncMock(return_value=([_aircraft(aircraft_id, status="active")], 41))

        response = client.get(
            "/api/v1/aircraft", params={"make": "cessna", "price_max": "100000", "page": 3, "limit": 20}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 41
        assert body["page"] == 3
        filters = service.search.call_args.args[0]
        assert filters.make == "cessna"
        assert filters.price_max == Decimal("100000")
        assert service.search.call_args.kwargs == {"page": 3, "limit": 20}

    def test_limit_is_capped(self, client, service):
        response = client.get("/api/v1/aircraft", params={"limit": 500})

        assert response.status_code == 422

    def test_by_slug(self, client, service, aircraft_id):
        service.get_by_slug = AsyncMock(return_value=_aircraft(aircraft_id, status="active"))

        response = client.get("/api/v1/aircraft/1978-cessna-172n-clean-skyhawk")

        assert response.status_code == 200
        assert response.json()["primary_photo_url"] is None
