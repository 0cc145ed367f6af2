"""Domain exception hierarchy for structured error responses."""

from __future__ import annotations


class AppException(Exception):
    """Base exception for all domain errors.

    Subclasses set ``code`` and ``status_code`` at the class level; callers
    provide ``message`` and an optional ``details`` list.
    """

    code: str = "APP_ERROR"
    status_code: int = 500

    def __init__(self, message: str, details: list[dict] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or []


class BadRequestException(AppException):
    code = "BAD_REQUEST"
    status_code = 400


class NotFoundException(AppException):
    code = "NOT_FOUND"
    status_code = 404


class ConflictException(AppException):
    code = "CONFLICT"
    status_code = 409


class ForbiddenException(AppException):
    code = "FORBIDDEN"
    status_code = 403


class UnauthorizedException(AppException):
    code = "UNAUTHORIZED"
    status_code = 401


class ValidationException(AppException):
    code = "VALIDATION_ERROR"
    status_code = 422


class BusinessRuleException(AppException):
    code = "BUSINESS_RULE_VIOLATION"
    status_code = 422


# ---------------------------------------------------------------------------
# Photo collection errors
# ---------------------------------------------------------------------------


class PhotoValidationException(ValidationException):
    """A candidate file was rejected before any I/O (type or size)."""

    code = "PHOTO_REJECTED"

    def __init__(self, message: str, reason: str, details: list[dict] | None = None) -> None:
        super().__init__(message, details or [{"field": "file", "message": reason}])
        self.reason = reason


class PhotoUploadException(AppException):
    """The photo store refused or failed a write."""

    code = "PHOTO_UPLOAD_FAILED"
    status_code = 502


class PhotoPersistException(AppException):
    """A photo row could not be written after its blob was stored."""

    code = "PHOTO_PERSIST_FAILED"
    status_code = 500


class InvalidPhotoSetException(AppException):
    """A reorder request does not name exactly the aircraft's current photos."""

    code = "INVALID_PHOTO_SET"
    status_code = 409


# ---------------------------------------------------------------------------
# Content generation
# ---------------------------------------------------------------------------


class ContentGenerationException(AppException):
    """The text generation provider failed; ``status_code`` is set per instance."""

    code = "CONTENT_GENERATION_FAILED"
    status_code = 502

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code
