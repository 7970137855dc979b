"""End-to-end news query pipeline."""

import logging
import time

from contextual_news.data import (
    Location,
    NewsQueryRequest,
    ParsedQuery,
    QueryFilters,
    QueryIntent,
    QueryMetadata,
    QueryResponse,
    ResultFilters,
)
from contextual_news.enrichment import EnrichmentAssembler
from contextual_news.query import QueryContext, QueryUnderstanding
from contextual_news.ranking import ArticleRanker
from contextual_news.retrieval import RetrievalContext, RetrievalOrchestrator
from contextual_news.run_logger import RunLogger

logger = logging.getLogger(__name__)


def merge_request_filters(parsed: ParsedQuery, request: NewsQueryRequest) -> ParsedQuery:
    """Fill filters the parser left unset from the request.

    Parsed values always win. A NEARBY query without any radius gets the
    request's resolved default radius.
    """
    filters = parsed.filters
    location = request.user_location

    score_threshold = filters.score_threshold
    if score_threshold is None:
        score_threshold = request.score_threshold

    radius_km = filters.radius_km
    if radius_km is None:
        if request.radius_km is not None:
            radius_km = request.radius_km
        elif parsed.has_intent(QueryIntent.NEARBY):
            radius_km = request.resolved_radius_km()

    latitude = filters.latitude
    if latitude is None and location is not None:
        latitude = location.latitude
    longitude = filters.longitude
    if longitude is None and location is not None:
        longitude = location.longitude

    merged = QueryFilters(
        category=filters.category,
        source=filters.source,
        score_threshold=score_threshold,
        radius_km=radius_km,
        latitude=latitude,
        longitude=longitude,
        date_from=filters.date_from,
        date_to=filters.date_to,
    )
    return parsed.with_filters(merged)


def build_metadata(parsed: ParsedQuery) -> QueryMetadata:
    return QueryMetadata(
        intents=[intent.value for intent in QueryIntent if intent in parsed.intents],
        entities=list(parsed.entities),
        concepts=list(parsed.concepts),
        filters=ResultFilters.from_filters(parsed.filters),
        llm_fallback_used=parsed.fallback_used,
    )


class NewsQueryService:
    """Answer news queries: understand, retrieve, rank, then enrich.

    Flow:
    1. QueryUnderstanding turns the text into a ParsedQuery (skipped by
       :meth:`query_with_parsed` and the shortcut queries)
    2. Request geo, radius and score fill any filters left unset
    3. RetrievalOrchestrator gathers candidates from every supporting strategy
    4. The ranker scores candidates; the best ``resolved_limit`` are kept
    5. EnrichmentAssembler explains the top articles

    Args:
        understanding: Query understanding with fallback.
        orchestrator: Multi-strategy retrieval.
        ranker: Candidate ranker.
        assembler: Enrichment and result projection.
        run_logger: Optional RunLogger for intermediate result logging.
    """

    def __init__(
        self,
        understanding: QueryUnderstanding,
        orchestrator: RetrievalOrchestrator,
        ranker: ArticleRanker,
        assembler: EnrichmentAssembler,
        run_logger: RunLogger | None = None,
    ) -> None:
        self._understanding = understanding
        self._orchestrator = orchestrator
        self._ranker = ranker
        self._assembler = assembler
        self._run_logger = run_logger

    async def query(self, request: NewsQueryRequest) -> QueryResponse:
        """Run the full pipeline for a free-text query."""
        if self._run_logger:
            self._run_logger.start_run("query", request)

        t0 = time.monotonic()
        parsed = await self._understanding.parse(QueryContext.from_request(request))
        if self._run_logger:
            self._run_logger.log_stage(
                stage="understanding",
                component=type(self._understanding).__name__,
                input_data=request.query,
                output_data=parsed,
                duration_seconds=time.monotonic() - t0,
            )
        return await self._execute(request, parsed)

    async def query_with_parsed(self, request: NewsQueryRequest, parsed: ParsedQuery) -> QueryResponse:
        """Run the pipeline with an already parsed query, skipping understanding."""
        if self._run_logger:
            self._run_logger.start_run("query_with_parsed", request)
        return await self._execute(request, parsed)

    async def _execute(self, request: NewsQueryRequest, parsed: ParsedQuery) -> QueryResponse:
        adjusted = merge_request_filters(parsed, request)
        metadata = build_metadata(adjusted)
        context = RetrievalContext(request=request, parsed_query=adjusted)
        limit = request.resolved_limit()

        t0 = time.monotonic()
        candidates = await self._orchestrator.retrieve(context, limit)
        if self._run_logger:
            self._run_logger.log_stage(
                stage="retrieval",
                component=type(self._orchestrator).__name__,
                input_data=adjusted,
                output_data=[
                    {"article_id": c.article.id, "strategy": c.strategy, "primary_score": c.primary_score}
                    for c in candidates
                ],
                duration_seconds=time.monotonic() - t0,
            )

        if not candidates:
            logger.info(f"No candidates for query {request.query!r}")
            if self._run_logger:
                self._run_logger.finish_run([])
            return QueryResponse(metadata=metadata, articles=[])

        t0 = time.monotonic()
        top = self._ranker.score(candidates, context)[:limit]
        if self._run_logger:
            self._run_logger.log_stage(
                stage="ranking",
                component=type(self._ranker).__name__,
                input_data={"candidate_count": len(candidates), "limit": limit},
                output_data=[
                    {
                        "article_id": s.article.id,
                        "final_score": s.final_score,
                        "match_reason": s.match_reason,
                        "relevance": s.relevance_contribution,
                        "recency": s.recency_contribution,
                        "semantic": s.semantic_contribution,
                        "proximity": s.proximity_contribution,
                    }
                    for s in top
                ],
                duration_seconds=time.monotonic() - t0,
            )

        t0 = time.monotonic()
        articles = await self._assembler.assemble(
            top, request.query, adjusted.filters.latitude, adjusted.filters.longitude
        )
        if self._run_logger:
            self._run_logger.log_stage(
                stage="enrichment",
                component=type(self._assembler).__name__,
                input_data={"top_n": self._assembler.top_n},
                output_data=articles,
                duration_seconds=time.monotonic() - t0,
            )
            self._run_logger.finish_run(articles)

        logger.info(f"Query {request.query!r} returned {len(articles)} articles")
        return QueryResponse(metadata=metadata, articles=articles)

    # Shortcut queries. Each builds its own ParsedQuery and skips understanding.

    async def by_category(self, category: str, limit: int | None = None) -> QueryResponse:
        request = NewsQueryRequest(query=f"category:{category}", max_results=limit)
        parsed = ParsedQuery.create(
            concepts=[category],
            intents={QueryIntent.CATEGORY},
            filters=QueryFilters(category=category),
            fallback_used=True,
        )
        return await self.query_with_parsed(request, parsed)

    async def by_source(self, source: str, limit: int | None = None) -> QueryResponse:
        request = NewsQueryRequest(query=f"source:{source}", max_results=limit)
        parsed = ParsedQuery.create(
            concepts=[source],
            intents={QueryIntent.SOURCE},
            filters=QueryFilters(source=source),
            fallback_used=True,
        )
        return await self.query_with_parsed(request, parsed)

    async def by_score(self, threshold: float, limit: int | None = None) -> QueryResponse:
        clamped = max(0.0, min(threshold, 1.0))
        request = NewsQueryRequest(query=f"score >= {clamped}", max_results=limit, score_threshold=clamped)
        parsed = ParsedQuery.create(
            concepts=["score"],
            intents={QueryIntent.SCORE},
            filters=QueryFilters(score_threshold=clamped),
            fallback_used=True,
        )
        return await self.query_with_parsed(request, parsed)

    async def search(self, text: str, limit: int | None = None) -> QueryResponse:
        request = NewsQueryRequest(query=text, max_results=limit)
        parsed = ParsedQuery.create(
            intents={QueryIntent.SEARCH},
            search_query=text,
            fallback_used=True,
        )
        return await self.query_with_parsed(request, parsed)

    async def nearby(
        self,
        latitude: float,
        longitude: float,
        radius_km: float | None = None,
        limit: int | None = None,
    ) -> QueryResponse:
        request = NewsQueryRequest(
            query=f"nearby:{latitude},{longitude}",
            user_location=Location(latitude=latitude, longitude=longitude),
            max_results=limit,
            radius_km=radius_km,
        )
        resolved_radius = radius_km if radius_km is not None else request.resolved_radius_km()
        parsed = ParsedQuery.create(
            concepts=["nearby"],
            intents={QueryIntent.NEARBY},
            filters=QueryFilters(radius_km=resolved_radius, latitude=latitude, longitude=longitude),
            fallback_used=True,
        )
        return await self.query_with_parsed(request, parsed)
