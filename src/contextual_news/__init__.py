"""Contextual News: intent-aware news retrieval, ranking and trending feeds."""

from contextual_news.config import ContextualNewsConfig, create_from_config, load_config
from contextual_news.data import (
    ArticleEnrichment,
    ArticleResult,
    ArticleScore,
    ArticleTrendAggregate,
    EventType,
    Location,
    NewsArticle,
    NewsQueryRequest,
    ParsedQuery,
    QueryFilters,
    QueryIntent,
    QueryResponse,
    RetrievedArticle,
    TrendingEventRequest,
    TrendingResponse,
)
from contextual_news.enrichment import (
    ClaudeEnricher,
    Enricher,
    EnrichmentAssembler,
    OllamaEnricher,
    RuleBasedEnricher,
)
from contextual_news.errors import ArticleNotFoundError, ContextualNewsError, InvalidRequestError
from contextual_news.geo import BoundingBox, BucketKey, GeoBucketer, bounding_box, distance_km
from contextual_news.pipeline import NewsQueryService
from contextual_news.query import (
    ClaudeQueryParser,
    OllamaQueryParser,
    QueryContext,
    QueryParser,
    QueryUnderstanding,
    RuleBasedQueryParser,
)
from contextual_news.ranking import ArticleRanker, RankingWeights, WeightedRanker
from contextual_news.retrieval import (
    CategoryStrategy,
    NearbyStrategy,
    RetrievalContext,
    RetrievalOrchestrator,
    RetrievalStrategy,
    ScoreStrategy,
    SearchStrategy,
    SourceStrategy,
)
from contextual_news.run_logger import RunLogger
from contextual_news.store import (
    ArticleFilter,
    ArticleStore,
    InMemoryArticleStore,
    InMemoryTrendStore,
    TrendAggregateStore,
    bootstrap_store,
    load_articles,
)
from contextual_news.trending import (
    TrendingAggregator,
    TrendingCache,
    TrendingEventSimulator,
    TTLTrendingCache,
)

__all__ = [
    # Models
    "ArticleEnrichment",
    "ArticleResult",
    "ArticleScore",
    "ArticleTrendAggregate",
    "EventType",
    "Location",
    "NewsArticle",
    "NewsQueryRequest",
    "ParsedQuery",
    "QueryFilters",
    "QueryIntent",
    "QueryResponse",
    "RetrievedArticle",
    "TrendingEventRequest",
    "TrendingResponse",
    # Errors
    "ArticleNotFoundError",
    "ContextualNewsError",
    "InvalidRequestError",
    # Geo
    "BoundingBox",
    "BucketKey",
    "GeoBucketer",
    "bounding_box",
    "distance_km",
    # Protocols
    "ArticleRanker",
    "ArticleStore",
    "Enricher",
    "QueryParser",
    "RetrievalStrategy",
    "TrendAggregateStore",
    "TrendingCache",
    # Query Understanding
    "ClaudeQueryParser",
    "OllamaQueryParser",
    "QueryContext",
    "QueryUnderstanding",
    "RuleBasedQueryParser",
    # Retrieval
    "CategoryStrategy",
    "NearbyStrategy",
    "RetrievalContext",
    "RetrievalOrchestrator",
    "ScoreStrategy",
    "SearchStrategy",
    "SourceStrategy",
    # Ranking
    "RankingWeights",
    "WeightedRanker",
    # Enrichment
    "ClaudeEnricher",
    "EnrichmentAssembler",
    "OllamaEnricher",
    "RuleBasedEnricher",
    # Trending
    "TTLTrendingCache",
    "TrendingAggregator",
    "TrendingEventSimulator",
    # Stores
    "ArticleFilter",
    "InMemoryArticleStore",
    "InMemoryTrendStore",
    "bootstrap_store",
    "load_articles",
    # Pipeline
    "NewsQueryService",
    # Logging
    "RunLogger",
    # Config
    "ContextualNewsConfig",
    "create_from_config",
    "load_config",
]
