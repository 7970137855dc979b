"""Trending feed cache port and its TTL implementation."""

from typing import Protocol

from cachetools import TTLCache

from contextual_news.data import TrendingResponse
from contextual_news.geo import BucketKey

TrendingCacheKey = tuple[BucketKey, float, int]


def trending_cache_key(bucket: BucketKey, radius_km: float, limit: int) -> TrendingCacheKey:
    return (bucket, round(radius_km, 1), limit)


class TrendingCache(Protocol):
    """Interface for caching trending feeds.

    Writers call :meth:`invalidate_all` on every ingested event; there is
    no per-bucket eviction.
    """

    def get(self, key: TrendingCacheKey) -> TrendingResponse | None: ...

    def put(self, key: TrendingCacheKey, response: TrendingResponse) -> None: ...

    def invalidate_all(self) -> None: ...


class TTLTrendingCache:
    """In-memory trending cache with per-entry expiry and LRU eviction.

    Args:
        ttl_seconds: Lifetime of an entry.
        max_size: Maximum number of entries.
    """

    def __init__(self, ttl_seconds: float = 60.0, max_size: int = 2000) -> None:
        self._cache: TTLCache[TrendingCacheKey, TrendingResponse] = TTLCache(
            maxsize=max_size, ttl=ttl_seconds
        )

    def get(self, key: TrendingCacheKey) -> TrendingResponse | None:
        return self._cache.get(key)

    def put(self, key: TrendingCacheKey, response: TrendingResponse) -> None:
        self._cache[key] = response

    def invalidate_all(self) -> None:
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)
