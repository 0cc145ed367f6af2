"""Pure checks applied to every candidate photo before any I/O."""

from __future__ import annotations

from src.exceptions import PhotoValidationException
from src.models.enums import PhotoRejectionReason
from src.modules.photos.constants import (
    ALLOWED_CONTENT_TYPES,
    CONTENT_TYPE_ALIASES,
    MAX_PHOTO_BYTES,
)


def normalize_content_type(content_type: str | None) -> str:
    """Lower-case, drop parameters (``; charset=...``) and resolve aliases."""
    if not content_type:
        return ""
    base = content_type.split(";", 1)[0].strip().lower()
    return CONTENT_TYPE_ALIASES.get(base, base)


def validate_photo(content_type: str | None, size: int, max_bytes: int = MAX_PHOTO_BYTES) -> str:
    """Return the normalized content type, or raise PhotoValidationException.

    The type is checked before the size; a file exactly ``max_bytes`` long passes.
    """
    normalized = normalize_content_type(content_type)
    if normalized not in ALLOWED_CONTENT_TYPES:
        raise PhotoValidationException(
            f"Unsupported file type: {content_type or 'unknown'}. Supported types: JPG, PNG, WebP",
            reason=PhotoRejectionReason.UNSUPPORTED_TYPE.value,
        )
    if size > max_bytes:
        raise PhotoValidationException(
            f"File too large: {size / (1024 * 1024):.1f}MB. "
            f"Maximum size: {max_bytes / (1024 * 1024):.0f}MB",
            reason=PhotoRejectionReason.TOO_LARGE.value,
        )
    return normalized
