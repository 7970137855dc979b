"""Weighted four-signal ranker.

Every candidate gets four contributions in [0, 1]:

    final = w_rel · relevance + w_rec · recency + w_sem · semantic + w_prox · proximity

- relevance: stored relevance score, clamped.
- recency: exponential decay on article age, ``exp(-ln2 / half_life · days)``.
- semantic: Jaccard overlap between query tokens and title/description tokens.
- proximity: the nearby strategy's closeness score, only when the user
  sent a location.

Weights need not sum to 1.
"""

import logging
import math
import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

from contextual_news.data import ArticleScore, NewsArticle, ParsedQuery, QueryIntent, RetrievedArticle
from contextual_news.geo import distance_km
from contextual_news.retrieval import RetrievalContext

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r"[^a-z0-9 ]")

# Checked in order; a label applies only when its intent was parsed.
_CANONICAL_REASONS: tuple[tuple[QueryIntent, str], ...] = (
    (QueryIntent.NEARBY, "nearby"),
    (QueryIntent.CATEGORY, "category"),
    (QueryIntent.SOURCE, "source"),
    (QueryIntent.SCORE, "score"),
)


@dataclass(frozen=True)
class RankingWeights:
    relevance: float = 0.35
    recency: float = 0.25
    semantic: float = 0.30
    proximity: float = 0.10
    recency_half_life_days: float = 7.0


def normalize_relevance(value: float | None) -> float:
    if value is None or math.isnan(value):
        return 0.0
    return max(0.0, min(1.0, value))


def recency_contribution(
    publication_date: datetime | None, now: datetime, half_life_days: float
) -> float:
    if publication_date is None:
        return 0.0
    # whole hours, truncated
    hours = int((now - publication_date).total_seconds() / 3600)
    days = hours / 24.0
    if days <= 0:
        return 1.0
    decay = math.log(2) / half_life_days
    return math.exp(-decay * days)


def tokenize(text: str | None) -> set[str]:
    if text is None or not text.strip():
        return set()
    normalized = _NON_ALNUM.sub(" ", text.lower())
    return {token for token in normalized.split() if len(token) > 2}


def semantic_contribution(parsed: ParsedQuery, query: str, article: NewsArticle) -> float:
    query_tokens = tokenize(query) | tokenize(parsed.search_query)
    if not query_tokens:
        return 0.0
    article_tokens = tokenize(article.title) | tokenize(article.description)
    if not article_tokens:
        return 0.0
    return len(query_tokens & article_tokens) / len(query_tokens | article_tokens)


def proximity_contribution(candidate: RetrievedArticle, context: RetrievalContext) -> float:
    if context.request.user_location is None or candidate.strategy != "nearby":
        return 0.0
    return max(0.0, min(1.0, candidate.primary_score))


def match_reason(parsed: ParsedQuery, strategy: str) -> str:
    for intent, label in _CANONICAL_REASONS:
        if strategy == label and parsed.has_intent(intent):
            return label
    return strategy


class WeightedRanker:
    """Fuse relevance, recency, semantic and proximity signals into one score.

    Ties on ``final_score`` are broken by article id so output order is
    deterministic.

    Args:
        weights: Contribution weights and recency half-life.
        clock: Returns the current time; injectable for tests.
    """

    def __init__(
        self,
        weights: RankingWeights | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._weights = weights or RankingWeights()
        self._clock = clock or (lambda: datetime.now(UTC))

    @property
    def weights(self) -> RankingWeights:
        return self._weights

    def score(
        self,
        candidates: list[RetrievedArticle],
        context: RetrievalContext,
    ) -> list[ArticleScore]:
        now = self._clock()
        scores = [self._score_candidate(candidate, context, now) for candidate in candidates]
        scores.sort(key=lambda s: (-s.final_score, str(s.article.id)))
        logger.debug(f"Ranked {len(scores)} candidates")
        return scores

    def _score_candidate(
        self, candidate: RetrievedArticle, context: RetrievalContext, now: datetime
    ) -> ArticleScore:
        article = candidate.article
        parsed = context.parsed_query
        w = self._weights

        relevance = normalize_relevance(article.relevance_score)
        recency = recency_contribution(article.publication_date, now, w.recency_half_life_days)
        semantic = semantic_contribution(parsed, context.request.query, article)
        proximity = proximity_contribution(candidate, context)

        final = (
            w.relevance * relevance
            + w.recency * recency
            + w.semantic * semantic
            + w.proximity * proximity
        )

        distance = None
        user_lat = context.resolve_latitude()
        user_lon = context.resolve_longitude()
        if user_lat is not None and user_lon is not None and article.has_coordinates:
            distance = distance_km(user_lat, user_lon, article.latitude, article.longitude)  # type: ignore[arg-type]

        return ArticleScore(
            article=article,
            final_score=final,
            distance_km=distance,
            match_reason=match_reason(parsed, candidate.strategy),
            relevance_contribution=relevance,
            recency_contribution=recency,
            semantic_contribution=semantic,
            proximity_contribution=proximity,
        )
