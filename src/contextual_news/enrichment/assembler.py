"""Top-N enrichment and final result projection."""

import asyncio
import logging
from uuid import UUID

from cachetools import TTLCache

from contextual_news.data import (
    ArticleEnrichment,
    ArticleResult,
    ArticleScore,
    Enrichment,
    EnrichmentRequest,
)
from contextual_news.enrichment.base import Enricher
from contextual_news.enrichment.rules import RuleBasedEnricher

logger = logging.getLogger(__name__)

_CacheKey = tuple[UUID, str | None, float | None, float | None]


class EnrichmentAssembler:
    """Enrich the best-ranked articles and project scores into results.

    Only the first ``top_n`` scores are enriched. The capability enricher is
    tried first; when it is absent or raises, the rule-based enricher
    answers. Capability answers with missing fields are completed from the
    rule-based answer. Capability answers are cached per article, query and
    user location.

    Args:
        enricher: Capability enricher, or *None* when the capability is disabled.
        fallback: Rule-based enricher.
        top_n: How many ranked articles to enrich.
        cache_ttl_seconds: How long enrichments stay cached.
        cache_max_size: Maximum number of cached enrichments.
    """

    def __init__(
        self,
        enricher: Enricher | None = None,
        fallback: RuleBasedEnricher | None = None,
        *,
        top_n: int = 5,
        cache_ttl_seconds: float = 900.0,
        cache_max_size: int = 5000,
    ) -> None:
        self._enricher = enricher
        self._fallback = fallback or RuleBasedEnricher()
        self._top_n = top_n
        self._cache: TTLCache[_CacheKey, ArticleEnrichment] = TTLCache(
            maxsize=cache_max_size, ttl=cache_ttl_seconds
        )

    @property
    def top_n(self) -> int:
        return self._top_n

    async def enrich_top(
        self,
        scores: list[ArticleScore],
        query: str | None,
        latitude: float | None,
        longitude: float | None,
    ) -> dict[UUID, ArticleEnrichment]:
        """Enrich the first ``top_n`` scores.

        Returns:
            Mapping of article id to enrichment; articles past ``top_n`` are absent.
        """
        requests = [
            EnrichmentRequest(
                article=score.article,
                user_query=query,
                user_latitude=latitude,
                user_longitude=longitude,
                score=score,
            )
            for score in scores[: self._top_n]
        ]
        enrichments = await asyncio.gather(*(self._enrich_one(r) for r in requests))
        return {r.article.id: e for r, e in zip(requests, enrichments, strict=True)}

    async def _enrich_one(self, request: EnrichmentRequest) -> ArticleEnrichment:
        fallback = self._fallback.enrich_sync(request)
        if self._enricher is None:
            return fallback

        key: _CacheKey = (
            request.article.id,
            request.user_query,
            request.user_latitude,
            request.user_longitude,
        )
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        try:
            enrichment = await self._enricher.enrich(request)
        except Exception as e:
            logger.warning(f"Enrichment failed for article {request.article.id}, using rules: {e}")
            return fallback

        merged = enrichment.merge_missing(fallback)
        self._cache[key] = merged
        return merged

    @staticmethod
    def to_article_result(score: ArticleScore, enrichment: ArticleEnrichment | None) -> ArticleResult:
        article = score.article
        safe = enrichment or ArticleEnrichment()
        return ArticleResult(
            id=article.id,
            title=article.title,
            description=article.description,
            url=article.url,
            publication_date=article.publication_date,
            source_name=article.source_name,
            categories=sorted(article.categories),
            relevance_score=article.relevance_score,
            final_score=score.final_score,
            distance_km=score.distance_km,
            match_reason=score.match_reason,
            enrichment=Enrichment(
                summary=safe.summary,
                key_entities=list(safe.key_entities),
                why_relevant=safe.why_relevant,
            ),
        )

    async def assemble(
        self,
        scores: list[ArticleScore],
        query: str | None,
        latitude: float | None,
        longitude: float | None,
    ) -> list[ArticleResult]:
        """Enrich the top of ``scores`` and project every score into a result."""
        enrichments = await self.enrich_top(scores, query, latitude, longitude)
        return [self.to_article_result(s, enrichments.get(s.article.id)) for s in scores]

    def clear_cache(self) -> None:
        self._cache.clear()
