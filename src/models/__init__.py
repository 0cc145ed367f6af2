# Import all models so SQLAlchemy metadata is populated for Alembic autogenerate
from src.models.aircraft import Aircraft
from src.models.aircraft_photo import AircraftPhoto
from src.models.blog_post import BlogPost
from src.models.enums import (
    AircraftStatus,
    PhotoFailureKind,
    PhotoOutcomeStatus,
    PhotoRejectionReason,
    UserRole,
)
from src.models.user import User

__all__ = [
    "Aircraft",
    "AircraftPhoto",
    "AircraftStatus",
    "BlogPost",
    "PhotoFailureKind",
    "PhotoOutcomeStatus",
    "PhotoRejectionReason",
    "User",
    "UserRole",
]
