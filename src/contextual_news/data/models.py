"""Core data models for contextual news retrieval."""

import math
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import StrEnum
from uuid import UUID

from contextual_news.geo import BucketKey


class QueryIntent(StrEnum):
    """Coarse classification of what a news query is asking for."""

    CATEGORY = "category"
    SCORE = "score"
    SEARCH = "search"
    SOURCE = "source"
    NEARBY = "nearby"
    UNKNOWN = "unknown"

    @classmethod
    def from_string(cls, value: str | None) -> "QueryIntent":
        """Map a free-form intent label to a member, UNKNOWN if unrecognized."""
        if value is None:
            return cls.UNKNOWN
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.UNKNOWN


class EventType(StrEnum):
    """Interaction events feeding the trending signal."""

    VIEW = "view"
    CLICK = "click"
    SHARE = "share"

    @property
    def weight(self) -> float:
        return _EVENT_WEIGHTS[self]


_EVENT_WEIGHTS: dict[EventType, float] = {
    EventType.VIEW: 1.0,
    EventType.CLICK: 3.0,
    EventType.SHARE: 5.0,
}


@dataclass(frozen=True)
class NewsArticle:
    """A stored news article."""

    id: UUID
    title: str
    description: str | None = None
    url: str | None = None
    publication_date: datetime | None = None
    source_name: str | None = None
    relevance_score: float | None = None
    latitude: float | None = None
    longitude: float | None = None
    categories: frozenset[str] = frozenset()

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None


@dataclass(frozen=True)
class QueryFilters:
    """Structured constraints extracted from (or merged into) a query."""

    category: str | None = None
    source: str | None = None
    score_threshold: float | None = None
    radius_km: float | None = None
    latitude: float | None = None
    longitude: float | None = None
    date_from: datetime | None = None
    date_to: datetime | None = None


@dataclass(frozen=True)
class ParsedQuery:
    """Structured representation of a news query.

    Build instances with :meth:`create`, which guarantees the intent set is
    never empty and always carries ``SEARCH``, and normalizes a blank
    ``search_query`` to ``None``. Derive modified copies with
    :meth:`with_filters` or :meth:`with_fallback`; instances are never
    mutated.
    """

    entities: tuple[str, ...] = ()
    concepts: tuple[str, ...] = ()
    intents: frozenset[QueryIntent] = frozenset({QueryIntent.SEARCH})
    filters: QueryFilters = field(default_factory=QueryFilters)
    search_query: str | None = None
    fallback_used: bool = False

    @classmethod
    def create(
        cls,
        *,
        entities: list[str] | tuple[str, ...] | None = None,
        concepts: list[str] | tuple[str, ...] | None = None,
        intents: set[QueryIntent] | frozenset[QueryIntent] | None = None,
        filters: QueryFilters | None = None,
        search_query: str | None = None,
        fallback_used: bool = False,
    ) -> "ParsedQuery":
        safe_intents = set(intents or ())
        safe_intents.add(QueryIntent.SEARCH)
        if search_query is not None and not search_query.strip():
            search_query = None
        return cls(
            entities=tuple(entities or ()),
            concepts=tuple(concepts or ()),
            intents=frozenset(safe_intents),
            filters=filters or QueryFilters(),
            search_query=search_query,
            fallback_used=fallback_used,
        )

    @classmethod
    def fallback(cls, query: str | None) -> "ParsedQuery":
        return cls.create(search_query=query, fallback_used=True)

    def has_intent(self, intent: QueryIntent) -> bool:
        return intent in self.intents

    def with_filters(self, filters: QueryFilters) -> "ParsedQuery":
        return replace(self, filters=filters)

    def with_fallback(self) -> "ParsedQuery":
        if self.fallback_used:
            return self
        return replace(self, fallback_used=True)


@dataclass(frozen=True)
class RetrievedArticle:
    """A candidate produced by one retrieval strategy."""

    article: NewsArticle
    strategy: str
    primary_score: float


@dataclass(frozen=True)
class ArticleScore:
    """Outcome of one ranking pass for a single article."""

    article: NewsArticle
    final_score: float
    distance_km: float | None
    match_reason: str
    relevance_contribution: float = 0.0
    recency_contribution: float = 0.0
    semantic_contribution: float = 0.0
    proximity_contribution: float = 0.0


@dataclass(frozen=True)
class ArticleEnrichment:
    """Generated explanation attached to a top-ranked article."""

    summary: str | None = None
    key_entities: tuple[str, ...] = ()
    why_relevant: str | None = None

    @property
    def is_empty(self) -> bool:
        return (
            not (self.summary and self.summary.strip())
            and not self.key_entities
            and not (self.why_relevant and self.why_relevant.strip())
        )

    def merge_missing(self, fallback: "ArticleEnrichment | None") -> "ArticleEnrichment":
        """Fill absent fields from ``fallback``, keeping every present field."""
        if fallback is None or fallback.is_empty:
            return self
        return ArticleEnrichment(
            summary=self.summary if self.summary is not None else fallback.summary,
            key_entities=self.key_entities or fallback.key_entities,
            why_relevant=self.why_relevant if self.why_relevant is not None else fallback.why_relevant,
        )


@dataclass(frozen=True)
class EnrichmentRequest:
    """Everything an enricher needs to explain one ranked article."""

    article: NewsArticle
    user_query: str | None
    user_latitude: float | None
    user_longitude: float | None
    score: ArticleScore


@dataclass
class ArticleTrendAggregate:
    """Decayed interaction score of one article within one geo bucket.

    ``score`` is the value as of ``last_interaction_at``; read it through
    :meth:`decayed_score` to get the value at another instant.
    """

    bucket: BucketKey
    article_id: UUID
    last_interaction_at: datetime
    score: float = 0.0
    event_count: int = 0

    def register_event(self, increment: float, occurred_at: datetime, decay_lambda: float) -> None:
        self.score = self.decayed_score(occurred_at, decay_lambda) + increment
        self.event_count += 1
        self.last_interaction_at = occurred_at

    def decayed_score(self, reference: datetime, decay_lambda: float) -> float:
        if self.score <= 0:
            return 0.0
        minutes = max(0, int((reference - self.last_interaction_at).total_seconds() // 60))
        return self.score * math.exp(-decay_lambda * minutes)
