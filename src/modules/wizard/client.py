"""HTTP client for the admin API, used by the wizard and the photo editor.

No retries: a failed call is reported once and the caller decides what to do.
"""

from __future__ import annotations

import json
import logging
import uuid
from collections.abc import Sequence
from typing import Any

import httpx

from src.modules.wizard.constants import CREATE_LISTING_PATH, DEFAULT_CLIENT_TIMEOUT_SECONDS
from src.modules.wizard.schemas import CandidatePhoto

logger = logging.getLogger(__name__)


class ApiClientError(Exception):
    """A request failed at the transport level or returned an error envelope."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        code: str | None = None,
        details: list[dict] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.details = details or []


def _photo_files(photos: Sequence[CandidatePhoto]) -> list[tuple[str, tuple[str, bytes, str]]]:
    return [("photos", (p.filename, p.data, p.content_type)) for p in photos]


def _photo_fields(photos: Sequence[CandidatePhoto]) -> dict[str, list[str]]:
    # One entry per file, empty when unset, so the server can pair by position
    return {
        "alt_text": [p.alt_text for p in photos],
        "caption": [p.caption or "" for p in photos],
    }


class AdminApiClient:
    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: float = DEFAULT_CLIENT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={"Authorization": f"Bearer {token}"},
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> AdminApiClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.RequestError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise ApiClientError(f"Network error: {exc}", code="NETWORK_ERROR") from exc

        if response.status_code >= 400:
            code, message, details = None, f"Request failed with status {response.status_code}", []
            try:
                error = response.json().get("error", {})
            except (ValueError, AttributeError):
                error = {}
            if isinstance(error, dict):
                code = error.get("code")
                message = error.get("message") or message
                details = error.get("details") or []
            logger.warning("%s %s returned %d (%s)", method, path, response.status_code, code)
            raise ApiClientError(message, status_code=response.status_code, code=code, details=details)

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------

    async def create_listing(
        self, aircraft: dict[str, Any], photos: Sequence[CandidatePhoto] = ()
    ) -> dict[str, Any]:
        """Multipart (``aircraft`` JSON part + ``photos`` files) when photos are queued, JSON otherwise."""
        if photos:
            return await self._request(
                "POST",
                CREATE_LISTING_PATH,
                data={"aircraft": json.dumps(aircraft), **_photo_fields(photos)},
                files=_photo_files(photos),
            )
        return await self._request("POST", CREATE_LISTING_PATH, json={"aircraft": aircraft})

    async def get_listing(self, aircraft_id: uuid.UUID | str) -> dict[str, Any]:
        return await self._request("GET", f"{CREATE_LISTING_PATH}/{aircraft_id}")

    async def auto_populate(self, title: str) -> dict[str, Any]:
        return await self._request("POST", f"{CREATE_LISTING_PATH}/auto-populate", json={"title": title})

    # ------------------------------------------------------------------
    # Photos
    # ------------------------------------------------------------------

    def _photos_path(self, aircraft_id: uuid.UUID | str) -> str:
        return f"{CREATE_LISTING_PATH}/{aircraft_id}/photos"

    async def list_photos(self, aircraft_id: uuid.UUID | str) -> list[dict[str, Any]]:
        body = await self._request("GET", self._photos_path(aircraft_id))
        return body["photos"]

    async def upload_photos(
        self, aircraft_id: uuid.UUID | str, photos: Sequence[CandidatePhoto]
    ) -> dict[str, Any]:
        return await self._request(
            "POST",
            self._photos_path(aircraft_id),
            data=_photo_fields(photos),
            files=_photo_files(photos),
        )

    async def reorder_photos(
        self, aircraft_id: uuid.UUID | str, ordered_ids: Sequence[uuid.UUID | str]
    ) -> list[dict[str, Any]]:
        body = await self._request(
            "PUT",
            f"{self._photos_path(aircraft_id)}/reorder",
            json={
                "photo_orders": [
                    {"id": str(photo_id), "display_order": index}
                    for index, photo_id in enumerate(ordered_ids)
                ]
            },
        )
        return body["photos"]

    async def delete_photo(
        self, aircraft_id: uuid.UUID | str, photo_id: uuid.UUID | str
    ) -> list[dict[str, Any]]:
        body = await self._request("DELETE", f"{self._photos_path(aircraft_id)}/{photo_id}")
        return body["photos"]

    async def set_primary_photo(
        self, aircraft_id: uuid.UUID | str, photo_id: uuid.UUID | str
    ) -> list[dict[str, Any]]:
        body = await self._request("POST", f"{self._photos_path(aircraft_id)}/{photo_id}/primary")
        return body["photos"]

    async def update_photo(
        self,
        aircraft_id: uuid.UUID | str,
        photo_id: uuid.UUID | str,
        alt_text: str | None = None,
        caption: str | None = None,
    ) -> dict[str, Any]:
        payload = {k: v for k, v in {"alt_text": alt_text, "caption": caption}.items() if v is not None}
        return await self._request("PATCH", f"{self._photos_path(aircraft_id)}/{photo_id}", json=payload)
