"""Request/response schemas for auto-populate and the LLM's structured replies."""

from __future__ import annotations

from pydantic import BaseModel, Field


class AircraftAutoPopulateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=300)


class BlogAutoPopulateRequest(BaseModel):
    topic: str = Field(..., min_length=1)


class TokenUsage(BaseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def add(self, other: TokenUsage) -> TokenUsage:
        return TokenUsage(
            prompt_tokens=self.prompt_tokens + other.prompt_tokens,
            completion_tokens=self.completion_tokens + other.completion_tokens,
            total_tokens=self.total_tokens + other.total_tokens,
        )


# ── LLM replies ───────────────────────────────────────────────────────────


class TitleDetails(BaseModel):
    year: str | None = None
    make: str | None = None
    model: str | None = None


class TitleValidation(BaseModel):
    valid: bool = False
    missing: list[str] = []
    enhanced_title: str | None = None
    details: TitleDetails = TitleDetails()


class DraftLocation(BaseModel):
    airport_code: str | None = None
    city: str | None = None
    country: str | None = None


class DraftSpecifications(BaseModel):
    category: str | None = None
    seats: int | None = None
    empty_weight: float | None = None
    max_takeoff_weight: float | None = None
    fuel_capacity: float | None = None
    cruise_speed: float | None = None
    service_ceiling: float | None = None
    range: float | None = None


class PriceRange(BaseModel):
    min: float | None = None
    max: float | None = None


class DraftMarketInfo(BaseModel):
    price_range: PriceRange = PriceRange()
    desirable_features: list[str] = []
    common_issues: list[str] = []
    maintenance_notes: list[str] = []


class AircraftDraft(BaseModel):
    make: str = ""
    model: str = ""
    year: int | None = None
    title: str = ""
    description: str = ""
    price: float | None = None
    hours: int | None = None
    engine_type: str | None = None
    avionics: str | None = None
    location: DraftLocation = DraftLocation()
    specifications: DraftSpecifications = DraftSpecifications()
    market_info: DraftMarketInfo = DraftMarketInfo()
    meta_description: str | None = None
    url_slug: str | None = None


class BlogDraft(BaseModel):
    title: str = ""
    slug: str = ""
    blurb: str | None = None
    content: str = ""
    meta_description: str | None = None
    header_photo: str | None = None
    topics: list[str] = []
    keywords: list[str] = []


class AircraftAutoPopulateResponse(BaseModel):
    data: AircraftDraft
    usage: TokenUsage


class BlogAutoPopulateResponse(BaseModel):
    data: BlogDraft
    usage: TokenUsage
