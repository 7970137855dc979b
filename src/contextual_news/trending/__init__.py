"""Geo-bucketed trending feed."""

from contextual_news.trending.aggregator import TrendingAggregator
from contextual_news.trending.cache import (
    TrendingCache,
    TrendingCacheKey,
    TTLTrendingCache,
    trending_cache_key,
)
from contextual_news.trending.simulator import TrendingEventSimulator

__all__ = [
    "TTLTrendingCache",
    "TrendingAggregator",
    "TrendingCache",
    "TrendingCacheKey",
    "TrendingEventSimulator",
    "trending_cache_key",
]
