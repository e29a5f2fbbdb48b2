"""Pydantic models for data validation and serialization."""

from __future__ import annotations

import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

PLACEHOLDER_IMAGE = "/placeholder.svg"


class PetType(str, Enum):
    DOG = "dog"
    CAT = "cat"
    OTHER = "other"


class PetSize(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class PetStatus(str, Enum):
    LOST = "lost"
    FOUND = "found"

    def opposite(self) -> PetStatus:
        """Return the status a matching listing must have."""
        return PetStatus.FOUND if self is PetStatus.LOST else PetStatus.LOST


class MatchConfidence(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class DateRange(str, Enum):
    """Report-age windows offered by the listing search."""

    TODAY = "today"
    WEEK = "week"
    MONTH = "month"


class ApiModel(BaseModel):
    """Base model serialized with camelCase keys, populated by either name."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Contact(ApiModel):
    """How to reach the person who reported a pet."""

    name: str
    phone: str
    whatsapp: str | None = None
    email: str | None = None


class PetRecord(ApiModel):
    """A single lost or found pet listing."""

    id: str = Field(description="Unique listing identifier")
    name: str = Field(description="Display name")
    type: PetType
    breed: str = Field(default="", description="Free-text breed")
    color: str = Field(default="", description="Free-text coat color")
    size: PetSize
    status: PetStatus
    location: str = Field(default="", description="Conventionally 'place, city'")
    date: datetime.date = Field(description="Report date")
    description: str = ""
    contact: Contact
    images: list[str] = Field(default_factory=list)

    @property
    def cover_image(self) -> str:
        """First image reference, or the placeholder when there are none."""
        return self.images[0] if self.images else PLACEHOLDER_IMAGE


class PetFeatures(ApiModel):
    """Coarse attributes extracted from a pet photo, real or mock."""

    breed: str | None = None
    color: str | None = None
    size: str | None = None
    confidence: float = Field(ge=0.0, le=1.0)
    markings: list[str] | None = None


class MatchResult(ApiModel):
    """A scored pairing of one lost and one found listing."""

    lost_pet: PetRecord
    found_pet: PetRecord
    similarity: int = Field(ge=0, le=100)
    matched_features: list[str] = Field(default_factory=list)
    confidence: MatchConfidence


class MatchResponse(ApiModel):
    """Response of the match query endpoint."""

    success: bool = True
    matches: list[MatchResult] = Field(default_factory=list)
    total: int = 0


class AnalyzeResponse(ApiModel):
    """Response of the image analysis endpoint."""

    success: bool = True
    features: PetFeatures
    message: str = "Image analyzed successfully"
    is_mock_data: bool


class CompareResponse(ApiModel):
    """Response of the image comparison endpoint."""

    success: bool = True
    similarity: float = Field(ge=0.0, le=100.0)
    message: str = "Images compared successfully"


class SearchFilters(ApiModel):
    """Listing search criteria; empty fields do not filter."""

    query: str = ""
    types: list[PetType] = Field(default_factory=list)
    statuses: list[PetStatus] = Field(default_factory=list)
    sizes: list[PetSize] = Field(default_factory=list)
    location: str = ""
    date_range: DateRange | None = None


class PetListResponse(ApiModel):
    """Response of the listing search endpoint."""

    success: bool = True
    pets: list[PetRecord] = Field(default_factory=list)
    total: int = 0


class PetResponse(ApiModel):
    """Response of the single-listing endpoint."""

    success: bool = True
    pet: PetRecord


class ErrorResponse(ApiModel):
    """Error body returned by every endpoint."""

    error: str
    details: str | None = None
