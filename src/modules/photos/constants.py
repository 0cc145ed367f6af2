"""Photo collection limits, accepted types and storage path layout."""

from __future__ import annotations

# Accepted MIME types -> file extension used in the storage path
ALLOWED_CONTENT_TYPES: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}

# Non-canonical aliases browsers still send
CONTENT_TYPE_ALIASES: dict[str, str] = {
    "image/jpg": "image/jpeg",
    "image/pjpeg": "image/jpeg",
}

MAX_PHOTO_BYTES = 10 * 1024 * 1024  # 10 MiB, inclusive

STORAGE_PREFIX = "aircraft"
MAX_NAME_SLUG_LENGTH = 60
DEFAULT_NAME_SLUG = "photo"
