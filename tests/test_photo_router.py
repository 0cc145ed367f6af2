"""Tests for the admin photo endpoints with the manager wired to in-memory fakes."""

import io
import uuid

import pytest
from fastapi import UploadFile
from fastapi.testclient import TestClient
from starlette.datastructures import Headers

from src.app import app
from src.modules.auth.auth import AuthenticatedUser
from src.modules.auth.dependencies import require_admin
from src.modules.photos.dependencies import get_photo_manager, read_uploads
from src.modules.photos.manager import PhotoCollectionManager

ADMIN = AuthenticatedUser(id=uuid.uuid4(), email="admin@zuluniner.com", role="authenticated")


@pytest.fixture
def client(photo_repository, photo_store):
    manager = PhotoCollectionManager(photo_repository, photo_store)
    app.dependency_overrides[get_photo_manager] = lambda: manager
    app.dependency_overrides[require_admin] = lambda: ADMIN
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _files(*names: str, content_type: str = "image/jpeg"):
    return [("photos", (name, b"\xff\xd8\xff" + name.encode(), content_type)) for name in names]


def _url(aircraft_id, suffix: str = "") -> str:
    return f"/api/v1/admin/aircraft/{aircraft_id}/photos{suffix}"


class TestUploadEndpoint:
    def test_upload_returns_outcomes(self, client, aircraft_id):
        files = _files("a.jpg", "b.jpg") + [("photos", ("notes.txt", b"hello", "text/plain"))]

        response = client.post(_url(aircraft_id), files=files)

        assert response.status_code == 201
        body = response.json()
        assert body["created"] == 2
        assert body["failed"] == 1
        assert [o["status"] for o in body["outcomes"]] == ["CREATED", "CREATED", "FAILED"]
        assert body["outcomes"][2]["error_kind"] == "VALIDATION"
        assert body["photos"][0]["is_primary"] is True
        # Loopback storage host is swapped for the request host
        assert body["photos"][0]["url"].startswith("http://testserver:54321/storage/v1/object/public/aircraft-photos/aircraft/")

    def test_no_files_is_bad_request(self, client, aircraft_id):
        response = client.post(_url(aircraft_id))

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "BAD_REQUEST"
        assert error["message"] == "No photos provided"
        assert error["requestId"] == response.headers["X-Request-ID"]

    def test_unknown_aircraft(self, client):
        response = client.post(_url(uuid.uuid4()), files=_files("a.jpg"))

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"


class TestCollectionEndpoints:
    def _seed(self, client, aircraft_id, count: int = 3) -> list[str]:
        names = [f"p{i}.jpg" for i in range(count)]
        response = client.post(_url(aircraft_id), files=_files(*names))
        return [p["id"] for p in response.json()["photos"]]

    def test_list(self, client, aircraft_id):
        ids = self._seed(client, aircraft_id)

        response = client.get(_url(aircraft_id))

        assert response.status_code == 200
        assert [p["id"] for p in response.json()["photos"]] == ids

    def test_reorder(self, client, aircraft_id):
        ids = self._seed(client, aircraft_id)
        body = {"photo_orders": [{"id": ids[2], "display_order": 0}, {"id": ids[0], "display_order": 1}, {"id": ids[1], "display_order": 2}]}

        response = client.put(_url(aircraft_id, "/reorder"), json=body)

        assert response.status_code == 200
        photos = response.json()["photos"]
        assert [p["id"] for p in photos] == [ids[2], ids[0], ids[1]]
        assert photos[0]["is_primary"] is True

    def test_reorder_incomplete_set_conflicts(self, client, aircraft_id):
        ids = self._seed(client, aircraft_id)
        body = {"photo_orders": [{"id": ids[0], "display_order": 0}]}

        response = client.put(_url(aircraft_id, "/reorder"), json=body)

        assert response.status_code == 409
        error = response.json()["error"]
        assert error["code"] == "INVALID_PHOTO_SET"
        assert len(error["details"]) == 2

    def test_reorder_negative_position_is_invalid(self, client, aircraft_id):
        ids = self._seed(client, aircraft_id, count=1)

        response = client.put(
            _url(aircraft_id, "/reorder"), json={"photo_orders": [{"id": ids[0], "display_order": -1}]}
        )

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_set_primary(self, client, aircraft_id):
        ids = self._seed(client, aircraft_id, count=2)

        response = client.post(_url(aircraft_id, f"/{ids[1]}/primary"))

        assert response.status_code == 200
        assert [p["is_primary"] for p in response.json()["photos"]] == [False, True]

    def test_update_details(self, client, aircraft_id):
        ids = self._seed(client, aircraft_id, count=1)

        response = client.patch(_url(aircraft_id, f"/{ids[0]}"), json={"alt_text": "Panel"})

        assert response.status_code == 200
        assert response.json()["alt_text"] == "Panel"

    def test_delete_returns_remaining(self, client, aircraft_id, photo_store):
        ids = self._seed(client, aircraft_id)

        response = client.delete(_url(aircraft_id, f"/{ids[1]}"))

        assert response.status_code == 200
        remaining = response.json()["photos"]
        assert [p["id"] for p in remaining] == [ids[0], ids[2]]
        assert [p["display_order"] for p in remaining] == [0, 2]
        assert len(photo_store.objects) == 2

    def test_delete_unknown_photo(self, client, aircraft_id):
        response = client.delete(_url(aircraft_id, f"/{uuid.uuid4()}"))

        assert response.status_code == 404


class TestAdminGuard:
    def test_missing_token_is_unauthorized(self, aircraft_id):
        with TestClient(app) as test_client:
            response = test_client.get(_url(aircraft_id))

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHORIZED"


class TestUploadMetadata:
    def test_alt_text_and_caption_pair_by_position(self, client, aircraft_id):
        response = client.post(
            _url(aircraft_id),
            files=_files("wing.jpg", "tail.jpg"),
            data={"alt_text": ["Left wing", ""], "caption": ["", "Tail number"]},
        )

        assert response.status_code == 201
        photos = response.json()["photos"]
        assert photos[0]["alt_text"] == "Left wing"
        assert photos[0]["caption"] is None
        assert photos[1]["alt_text"] == ""
        assert photos[1]["caption"] == "Tail number"

    def test_missing_metadata_parts_default_to_empty(self, client, aircraft_id):
        response = client.post(
            _url(aircraft_id), files=_files("a.jpg", "b.jpg"), data={"alt_text": ["Only first"]}
        )

        photos = response.json()["photos"]
        assert [p["alt_text"] for p in photos] == ["Only first", ""]

    def test_too_many_files_is_bad_request(self, client, aircraft_id):
        response = client.post(_url(aircraft_id), files=_files(*[f"p{i}.jpg" for i in range(21)]))

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Too many photos: 21. Maximum per request: 20"

    def test_oversize_file_fails_without_blocking_batch(self, client, photo_store, aircraft_id):
        manager = app.dependency_overrides[get_photo_manager]()
        manager.max_bytes = 16
        files = _files("small.jpg") + [("photos", ("huge.jpg", b"\xff\xd8" + b"x" * 64, "image/jpeg"))]

        response = client.post(_url(aircraft_id), files=files)

        assert response.status_code == 201
        outcomes = response.json()["outcomes"]
        assert [o["status"] for o in outcomes] == ["CREATED", "FAILED"]
        assert outcomes[1]["error_kind"] == "VALIDATION"
        assert len(photo_store.objects) == 1


class TestReadUploads:
    @pytest.mark.asyncio
    async def test_declared_oversize_body_is_not_read(self):
        body = io.BytesIO(b"\xff\xd8" + b"x" * 100)
        upload = UploadFile(
            file=body, filename="big.jpg", size=102, headers=Headers({"content-type": "image/jpeg"})
        )

        [photo] = await read_uploads([upload], max_bytes=50)

        assert photo.data == b""
        assert photo.size == 102
        assert body.tell() == 0

    @pytest.mark.asyncio
    async def test_body_within_limit_is_read(self):
        upload = UploadFile(
            file=io.BytesIO(b"\xff\xd8ok"),
            filename="ok.jpg",
            size=4,
            headers=Headers({"content-type": "image/jpeg"}),
        )

        [photo] = await read_uploads([upload], alt_texts=["Nose"], captions=["On the ramp"], max_bytes=50)

        assert photo.data == b"\xff\xd8ok"
        assert photo.size == 4
        assert photo.content_type == "image/jpeg"
        assert (photo.alt_text, photo.caption) == ("Nose", "On the ramp")

    @pytest.mark.asyncio
    async def test_unnamed_parts_are_skipped_but_keep_positions(self):
        uploads = [
            UploadFile(file=io.BytesIO(b""), filename="", headers=Headers({"content-type": "image/jpeg"})),
            UploadFile(file=io.BytesIO(b"\xff\xd8"), filename="b.jpg", headers=Headers({"content-type": "image/jpeg"})),
        ]

        photos = await read_uploads(uploads, alt_texts=["ignored", "Second"], max_bytes=50)

        assert [(p.filename, p.alt_text) for p in photos] == [("b.jpg", "Second")]
