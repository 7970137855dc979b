"""Outbound result projections."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from contextual_news.data.models import QueryFilters


class Enrichment(BaseModel):
    summary: str | None = None
    key_entities: list[str] = Field(default_factory=list)
    why_relevant: str | None = None


class ArticleResult(BaseModel):
    """One ranked article as returned to callers."""

    id: UUID
    title: str
    description: str | None = None
    url: str | None = None
    publication_date: datetime | None = None
    source_name: str | None = None
    categories: list[str] = Field(default_factory=list)
    relevance_score: float | None = None
    final_score: float
    distance_km: float | None = None
    match_reason: str
    enrichment: Enrichment = Field(default_factory=Enrichment)


class ResultFilters(BaseModel):
    category: str | None = None
    source: str | None = None
    score_threshold: float | None = None
    radius_km: float | None = None
    latitude: float | None = None
    longitude: float | None = None
    date_from: datetime | None = None
    date_to: datetime | None = None

    @classmethod
    def from_filters(cls, filters: QueryFilters) -> "ResultFilters":
        return cls(
            category=filters.category,
            source=filters.source,
            score_threshold=filters.score_threshold,
            radius_km=filters.radius_km,
            latitude=filters.latitude,
            longitude=filters.longitude,
            date_from=filters.date_from,
            date_to=filters.date_to,
        )


class QueryMetadata(BaseModel):
    intents: list[str]
    entities: list[str]
    concepts: list[str]
    filters: ResultFilters
    llm_fallback_used: bool


class QueryResponse(BaseModel):
    metadata: QueryMetadata
    articles: list[ArticleResult]


class TrendingMetadata(BaseModel):
    latitude: float
    longitude: float
    radius_km: float
    limit: int
    cache_hit: bool
    bucket_id: str


class TrendingResponse(BaseModel):
    metadata: TrendingMetadata
    articles: list[ArticleResult]
