"""Factory functions to create components from configuration."""

from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from contextual_news.config.models import (
    ClaudeLLMConfig,
    ContextualNewsConfig,
    DisabledLLMConfig,
    EnrichmentConfig,
    LLMConfig,
    OllamaLLMConfig,
    RankingConfig,
    TrendingConfig,
    UnderstandingConfig,
)
from contextual_news.enrichment import (
    ClaudeEnricher,
    Enricher,
    EnrichmentAssembler,
    OllamaEnricher,
)
from contextual_news.geo import GeoBucketer
from contextual_news.llm import OllamaChatClient
from contextual_news.pipeline import NewsQueryService
from contextual_news.query import ClaudeQueryParser, OllamaQueryParser, QueryParser, QueryUnderstanding
from contextual_news.ranking import RankingWeights, WeightedRanker
from contextual_news.retrieval import RetrievalOrchestrator, default_strategies
from contextual_news.run_logger import RunLogger
from contextual_news.store import (
    ArticleStore,
    InMemoryArticleStore,
    InMemoryTrendStore,
    TrendAggregateStore,
)
from contextual_news.trending import TrendingAggregator, TTLTrendingCache


def create_capabilities(config: LLMConfig) -> tuple[QueryParser | None, Enricher | None]:
    """Create the language-model query parser and enricher from config.

    Uses explicit type matching rather than getattr. A disabled capability
    yields ``(None, None)``.
    """
    if isinstance(config, ClaudeLLMConfig):
        return (
            ClaudeQueryParser(
                model=config.model,
                timeout=config.request_timeout_seconds,
                system_prompt=config.system_prompt,
            ),
            ClaudeEnricher(model=config.model, timeout=config.request_timeout_seconds),
        )
    if isinstance(config, OllamaLLMConfig):
        client = OllamaChatClient(
            model=config.model,
            base_url=config.base_url,
            timeout=config.request_timeout_seconds,
        )
        return (OllamaQueryParser(client), OllamaEnricher(client))
    if isinstance(config, DisabledLLMConfig):
        return (None, None)
    msg = f"Unknown llm config type: {type(config)}"
    raise ValueError(msg)


def create_understanding(config: UnderstandingConfig, parser: QueryParser | None) -> QueryUnderstanding:
    return QueryUnderstanding(
        parser,
        cache_ttl_seconds=config.cache_ttl_seconds,
        cache_max_size=config.cache_max_size,
    )


def create_ranker(
    config: RankingConfig, clock: Callable[[], datetime] | None = None
) -> WeightedRanker:
    weights = RankingWeights(
        relevance=config.relevance_weight,
        recency=config.recency_weight,
        semantic=config.semantic_weight,
        proximity=config.proximity_weight,
        recency_half_life_days=config.recency_half_life_days,
    )
    return WeightedRanker(weights, clock=clock)


def create_assembler(config: EnrichmentConfig, enricher: Enricher | None) -> EnrichmentAssembler:
    return EnrichmentAssembler(
        enricher,
        top_n=config.top_n,
        cache_ttl_seconds=config.cache_ttl_seconds,
        cache_max_size=config.cache_max_size,
    )


def create_trending(
    config: TrendingConfig,
    articles: ArticleStore,
    aggregates: TrendAggregateStore,
    assembler: EnrichmentAssembler,
    clock: Callable[[], datetime] | None = None,
) -> TrendingAggregator:
    return TrendingAggregator(
        articles,
        aggregates,
        assembler,
        bucketer=GeoBucketer(config.bucket_size_degrees),
        cache=TTLTrendingCache(ttl_seconds=config.cache_ttl_seconds, max_size=config.cache_max_size),
        half_life_minutes=config.half_life_minutes,
        default_radius_km=config.default_radius_km,
        default_limit=config.default_limit,
        clock=clock,
    )


def create_from_config(
    config: ContextualNewsConfig,
    *,
    articles: ArticleStore | None = None,
    aggregates: TrendAggregateStore | None = None,
    log_override: bool | None = None,
    log_dir_override: str | None = None,
    clock: Callable[[], datetime] | None = None,
) -> tuple[NewsQueryService, TrendingAggregator, RunLogger | None]:
    """Create the query service and trending aggregator from root config.

    Args:
        config: Root configuration.
        articles: Article store; a fresh in-memory store if omitted.
        aggregates: Trend aggregate store; a fresh in-memory store if omitted.
        log_override: Override the config's logging.enabled setting.
        log_dir_override: Override the config's logging.log_dir setting.
        clock: Current-time source shared by ranking and trending.

    Returns:
        Tuple of (query service, trending aggregator, run_logger).
        run_logger is None if logging is disabled.
    """
    log_enabled = log_override if log_override is not None else config.logging.enabled
    log_dir = Path(log_dir_override if log_dir_override is not None else config.logging.log_dir)

    run_logger: RunLogger | None = None
    if log_enabled:
        run_logger = RunLogger(log_dir=log_dir, enabled=True)

    article_store = articles if articles is not None else InMemoryArticleStore()
    trend_store = aggregates if aggregates is not None else InMemoryTrendStore()

    parser, enricher = create_capabilities(config.llm)
    assembler = create_assembler(config.enrichment, enricher)
    service = NewsQueryService(
        understanding=create_understanding(config.understanding, parser),
        orchestrator=RetrievalOrchestrator(default_strategies(article_store)),
        ranker=create_ranker(config.ranking, clock),
        assembler=assembler,
        run_logger=run_logger,
    )
    trending = create_trending(config.trending, article_store, trend_store, assembler, clock)
    return (service, trending, run_logger)
