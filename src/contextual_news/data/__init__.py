from contextual_news.data.models import (
    ArticleEnrichment,
    ArticleScore,
    ArticleTrendAggregate,
    EnrichmentRequest,
    EventType,
    NewsArticle,
    ParsedQuery,
    QueryFilters,
    QueryIntent,
    RetrievedArticle,
)
from contextual_news.data.requests import (
    Location,
    NewsQueryRequest,
    TrendingEventRequest,
    TrendingFeedRequest,
)
from contextual_news.data.responses import (
    ArticleResult,
    Enrichment,
    QueryMetadata,
    QueryResponse,
    ResultFilters,
    TrendingMetadata,
    TrendingResponse,
)

__all__ = [
    "ArticleEnrichment",
    "ArticleResult",
    "ArticleScore",
    "ArticleTrendAggregate",
    "Enrichment",
    "EnrichmentRequest",
    "EventType",
    "Location",
    "NewsArticle",
    "NewsQueryRequest",
    "ParsedQuery",
    "QueryFilters",
    "QueryIntent",
    "QueryMetadata",
    "QueryResponse",
    "ResultFilters",
    "RetrievedArticle",
    "TrendingEventRequest",
    "TrendingFeedRequest",
    "TrendingMetadata",
    "TrendingResponse",
]
