from dataclasses import dataclass
from typing import Protocol

from contextual_news.data import NewsQueryRequest, ParsedQuery, RetrievedArticle


@dataclass(frozen=True)
class RetrievalContext:
    """The validated request together with its (filter-merged) parsed query."""

    request: NewsQueryRequest
    parsed_query: ParsedQuery

    def resolve_latitude(self) -> float | None:
        if self.parsed_query.filters.latitude is not None:
            return self.parsed_query.filters.latitude
        location = self.request.user_location
        return location.latitude if location else None

    def resolve_longitude(self) -> float | None:
        if self.parsed_query.filters.longitude is not None:
            return self.parsed_query.filters.longitude
        location = self.request.user_location
        return location.longitude if location else None

    def resolve_radius_km(self) -> float:
        if self.parsed_query.filters.radius_km is not None:
            return self.parsed_query.filters.radius_km
        return self.request.resolved_radius_km()


class RetrievalStrategy(Protocol):
    """Interface for one candidate-producing retrieval policy.

    Strategies are read-only and independent of each other. ``priority``
    fixes their merge order: lower values win duplicate articles.
    """

    @property
    def name(self) -> str: ...

    @property
    def priority(self) -> int: ...

    def supports(self, context: RetrievalContext) -> bool: ...

    async def retrieve(self, context: RetrievalContext, limit: int) -> list[RetrievedArticle]:
        """Fetch up to ``limit`` candidates for this strategy.

        Args:
            context: Request and parsed query.
            limit: Maximum number of candidates.

        Returns:
            Candidates ordered by stored relevance then publication date,
            both descending.
        """
        ...
