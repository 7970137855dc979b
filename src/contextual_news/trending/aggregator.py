"""Decayed, geo-bucketed interaction scores and the trending feed."""

import asyncio
import logging
import math
from collections import defaultdict
from collections.abc import Callable
from datetime import UTC, datetime
from uuid import UUID

from contextual_news.data import (
    ArticleScore,
    ArticleTrendAggregate,
    TrendingEventRequest,
    TrendingFeedRequest,
    TrendingMetadata,
    TrendingResponse,
)
from contextual_news.enrichment import EnrichmentAssembler
from contextual_news.errors import ArticleNotFoundError, InvalidRequestError
from contextual_news.geo import GeoBucketer, distance_km
from contextual_news.store import ArticleStore, TrendAggregateStore
from contextual_news.trending.cache import TrendingCache, TTLTrendingCache, trending_cache_key

logger = logging.getLogger(__name__)

DEFAULT_RADIUS_KM = 25.0
MIN_RADIUS_KM = 1.0
MAX_RADIUS_KM = 200.0
DEFAULT_LIMIT = 5
MAX_LIMIT = 20
TRENDING_REASON = "trending"


class TrendingAggregator:
    """Ingest interaction events and answer "what's trending near here".

    Each event adds its weight (view 1, click 3, share 5) to the aggregate
    of its (bucket, article) pair after decaying the stored score with the
    configured half-life. Feed reads scan the surrounding buckets and keep
    each article's best decayed score.

    Args:
        articles: Article store, for event validation and feed projection.
        aggregates: Trend aggregate store.
        assembler: Enriches and projects feed entries.
        bucketer: Geo grid; defaults to 0.5 degree cells.
        cache: Feed cache; emptied on every event.
        half_life_minutes: Score half-life.
        default_radius_km: Feed radius when none is given.
        default_limit: Feed size when none is given.
        clock: Returns the current time; injectable for tests.
    """

    def __init__(
        self,
        articles: ArticleStore,
        aggregates: TrendAggregateStore,
        assembler: EnrichmentAssembler,
        *,
        bucketer: GeoBucketer | None = None,
        cache: TrendingCache | None = None,
        half_life_minutes: float = 360.0,
        default_radius_km: float = DEFAULT_RADIUS_KM,
        default_limit: int = DEFAULT_LIMIT,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if half_life_minutes <= 0:
            raise ValueError("half_life_minutes must be positive")
        self._articles = articles
        self._aggregates = aggregates
        self._assembler = assembler
        self._bucketer = bucketer or GeoBucketer()
        self._cache = cache if cache is not None else TTLTrendingCache()
        self._decay_lambda = math.log(2) / half_life_minutes
        self._default_radius_km = default_radius_km
        self._default_limit = default_limit
        self._clock = clock or (lambda: datetime.now(UTC))
        self._write_lock = asyncio.Lock()
        self._generation = 0

    @property
    def decay_lambda(self) -> float:
        return self._decay_lambda

    async def record_event(self, request: TrendingEventRequest) -> ArticleTrendAggregate:
        """Apply one interaction event to its (bucket, article) aggregate.

        The event is scored at its own location, else at the article's.

        Raises:
            ArticleNotFoundError: If the article does not exist.
            InvalidRequestError: If neither the event nor the article has a location.
        """
        occurred_at = request.occurred_at or self._clock()
        article = await self._articles.find_by_id(request.article_id)
        if article is None:
            raise ArticleNotFoundError(request.article_id)

        if request.user_location is not None:
            latitude, longitude = request.user_location.latitude, request.user_location.longitude
        elif article.has_coordinates:
            latitude, longitude = article.latitude, article.longitude
        else:
            raise InvalidRequestError(f"No location for event on article {article.id}")

        bucket = self._bucketer.bucket_for(latitude, longitude)  # type: ignore[arg-type]
        async with self._write_lock:
            aggregate = await self._aggregates.find_by_id(bucket, article.id)
            if aggregate is None:
                aggregate = ArticleTrendAggregate(
                    bucket=bucket, article_id=article.id, last_interaction_at=occurred_at
                )
            aggregate.register_event(request.event_type.weight, occurred_at, self._decay_lambda)
            await self._aggregates.save(aggregate)
            self._generation += 1
            self._cache.invalidate_all()

        logger.debug(
            f"Recorded {request.event_type} for {article.id} in bucket {bucket}: "
            f"score={aggregate.score:.3f}"
        )
        return aggregate

    async def get_trending_feed(
        self,
        latitude: float,
        longitude: float,
        radius_km: float | None = None,
        limit: int | None = None,
    ) -> TrendingResponse:
        """Most-interacted articles around a point, best first.

        Raises:
            pydantic.ValidationError: If the coordinates are out of range.
        """
        feed = TrendingFeedRequest(
            latitude=latitude, longitude=longitude, radius_km=radius_km, limit=limit
        )
        radius = self._resolve_radius(feed.radius_km)
        size = self._resolve_limit(feed.limit)
        primary = self._bucketer.bucket_for(feed.latitude, feed.longitude)
        key = trending_cache_key(primary, radius, size)

        cached = self._cache.get(key)
        if cached is not None:
            metadata = TrendingMetadata(
                latitude=feed.latitude,
                longitude=feed.longitude,
                radius_km=radius,
                limit=size,
                cache_hit=True,
                bucket_id=cached.metadata.bucket_id,
            )
            return TrendingResponse(metadata=metadata, articles=cached.articles)

        generation = self._generation
        scores = await self._score_articles(feed.latitude, feed.longitude, radius)
        top = scores[:size]
        results = await self._assembler.assemble(top, None, feed.latitude, feed.longitude)

        response = TrendingResponse(
            metadata=TrendingMetadata(
                latitude=feed.latitude,
                longitude=feed.longitude,
                radius_km=radius,
                limit=size,
                cache_hit=False,
                bucket_id=str(primary),
            ),
            articles=results,
        )
        # An event recorded while this feed was built makes it stale.
        if generation == self._generation:
            self._cache.put(key, response)
        logger.info(f"Trending feed for bucket {primary}: {len(results)} articles")
        return response

    async def _score_articles(self, latitude: float, longitude: float, radius_km: float) -> list[ArticleScore]:
        buckets = self._bucketer.nearby_buckets(latitude, longitude, radius_km)
        aggregates = await self._aggregates.find_by_bucket_ids(buckets)
        if not aggregates:
            return []

        now = self._clock()
        best: dict[UUID, float] = defaultdict(float)
        for aggregate in aggregates:
            decayed = aggregate.decayed_score(now, self._decay_lambda)
            best[aggregate.article_id] = max(best[aggregate.article_id], decayed)

        articles = await self._articles.find_all_by_id(best.keys())
        scores = []
        for article in articles:
            score = best[article.id]
            if score <= 0.0:
                continue
            distance = None
            if article.has_coordinates:
                distance = distance_km(latitude, longitude, article.latitude, article.longitude)  # type: ignore[arg-type]
            scores.append(
                ArticleScore(
                    article=article,
                    final_score=score,
                    distance_km=distance,
                    match_reason=TRENDING_REASON,
                    relevance_contribution=score,
                )
            )
        scores.sort(key=lambda s: (-s.final_score, str(s.article.id)))
        return scores

    def _resolve_radius(self, radius_km: float | None) -> float:
        if radius_km is None:
            return self._default_radius_km
        return max(MIN_RADIUS_KM, min(radius_km, MAX_RADIUS_KM))

    def _resolve_limit(self, limit: int | None) -> int:
        if limit is None:
            return self._default_limit
        return max(1, min(limit, MAX_LIMIT))
