"""Validated inbound requests.

Every request is checked here, before any pipeline stage runs; invalid
input raises ``pydantic.ValidationError``.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from contextual_news.data.models import EventType

DEFAULT_LIMIT = 10
MAX_RESOLVED_LIMIT = 50
DEFAULT_RADIUS_KM = 10.0
MAX_RESOLVED_RADIUS_KM = 100.0


class Location(BaseModel):
    """A user or event location in decimal degrees."""

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)

    model_config = {"frozen": True}


class NewsQueryRequest(BaseModel):
    """A free-text news query with optional geo and score hints."""

    query: str = Field(max_length=500)
    user_location: Location | None = None
    max_results: int | None = Field(default=None, gt=0, le=100)
    radius_km: float | None = Field(default=None, gt=0, le=500)
    score_threshold: float | None = Field(default=None, ge=0.0, le=1.0)

    model_config = {"frozen": True}

    @field_validator("query")
    @classmethod
    def query_must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("query must not be blank")
        return v

    def resolved_limit(self) -> int:
        if self.max_results is None:
            return DEFAULT_LIMIT
        return min(self.max_results, MAX_RESOLVED_LIMIT)

    def resolved_radius_km(self) -> float:
        if self.radius_km is None:
            return DEFAULT_RADIUS_KM
        return min(self.radius_km, MAX_RESOLVED_RADIUS_KM)


class TrendingEventRequest(BaseModel):
    """A single view/click/share interaction with an article."""

    event_type: EventType
    article_id: UUID
    user_location: Location | None = None
    occurred_at: datetime | None = None

    model_config = {"frozen": True}


class TrendingFeedRequest(BaseModel):
    """Coordinates of a trending lookup; radius and limit are clamped later."""

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)
    radius_km: float | None = None
    limit: int | None = None

    model_config = {"frozen": True}
