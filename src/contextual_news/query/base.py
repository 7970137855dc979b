from dataclasses import dataclass
from typing import Protocol

from contextual_news.data import NewsQueryRequest, ParsedQuery


@dataclass(frozen=True)
class QueryContext:
    """Raw query text plus the optional geo/score hints sent with it."""

    query: str
    latitude: float | None = None
    longitude: float | None = None
    radius_km: float | None = None
    score_threshold: float | None = None

    @classmethod
    def from_request(cls, request: NewsQueryRequest) -> "QueryContext":
        location = request.user_location
        return cls(
            query=request.query,
            latitude=location.latitude if location else None,
            longitude=location.longitude if location else None,
            radius_km=request.radius_km,
            score_threshold=request.score_threshold,
        )


class QueryParser(Protocol):
    """Interface for turning a raw query into a structured ParsedQuery."""

    async def parse(self, context: QueryContext) -> ParsedQuery: ...
