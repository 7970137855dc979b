"""Query understanding with language-model parsing and rule-based fallback."""

import logging

from cachetools import TTLCache

from contextual_news.data import ParsedQuery
from contextual_news.query.base import QueryContext, QueryParser
from contextual_news.query.rules import RuleBasedQueryParser

logger = logging.getLogger(__name__)

_CacheKey = tuple[str, float | None, float | None, float | None, float | None]


class QueryUnderstanding:
    """Turn a raw query into a ParsedQuery, caching per query and geo-context.

    The primary parser (usually a language model) is tried first. When it is
    absent, raises, or returns nothing, the rule-based parser answers and
    the result is flagged with ``fallback_used``.

    Args:
        primary: Capability parser, or *None* when the capability is disabled.
        fallback: Rule-based parser used when the capability cannot answer.
        cache_ttl_seconds: How long parsed queries stay cached.
        cache_max_size: Maximum number of cached parsed queries.
    """

    def __init__(
        self,
        primary: QueryParser | None = None,
        fallback: RuleBasedQueryParser | None = None,
        *,
        cache_ttl_seconds: float = 21600.0,
        cache_max_size: int = 1000,
    ) -> None:
        self._primary = primary
        self._fallback = fallback or RuleBasedQueryParser()
        self._cache: TTLCache[_CacheKey, ParsedQuery] = TTLCache(
            maxsize=cache_max_size, ttl=cache_ttl_seconds
        )

    @property
    def capability_enabled(self) -> bool:
        return self._primary is not None

    @staticmethod
    def _cache_key(context: QueryContext) -> _CacheKey:
        return (
            context.query,
            context.latitude,
            context.longitude,
            context.radius_km,
            context.score_threshold,
        )

    async def parse(self, context: QueryContext) -> ParsedQuery:
        key = self._cache_key(context)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Query understanding cache hit for %r", context.query)
            return cached

        parsed = await self._parse_uncached(context)
        self._cache[key] = parsed
        return parsed

    async def _parse_uncached(self, context: QueryContext) -> ParsedQuery:
        if self._primary is None:
            logger.debug("Query capability disabled, using rules for %r", context.query)
            return self._fallback.parse_sync(context).with_fallback()

        try:
            parsed = await self._primary.parse(context)
        except Exception as e:
            logger.warning("Query capability failed for %r, using rules: %s", context.query, e)
            return self._fallback.parse_sync(context).with_fallback()

        if parsed is None:
            logger.warning("Query capability returned nothing for %r, using rules", context.query)
            return self._fallback.parse_sync(context).with_fallback()
        return parsed

    def clear_cache(self) -> None:
        self._cache.clear()
