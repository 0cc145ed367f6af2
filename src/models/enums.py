import enum


class AircraftStatus(str, enum.Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    SOLD = "sold"
    DELETED = "deleted"


class UserRole(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"


# ── Photo collection outcomes ─────────────────────────────────────────────


class PhotoRejectionReason(str, enum.Enum):
    UNSUPPORTED_TYPE = "UNSUPPORTED_TYPE"
    TOO_LARGE = "TOO_LARGE"


class PhotoOutcomeStatus(str, enum.Enum):
    CREATED = "CREATED"
    FAILED = "FAILED"


class PhotoFailureKind(str, enum.Enum):
    VALIDATION = "VALIDATION"
    UPLOAD = "UPLOAD"
    PERSIST = "PERSIST"
