"""Store-backed retrieval strategies, one per query intent."""

from contextual_news.data import NewsArticle, QueryIntent, RetrievedArticle
from contextual_news.geo import distance_km
from contextual_news.retrieval.base import RetrievalContext
from contextual_news.retrieval.support import (
    base_filter,
    stored_relevance,
    with_nearby_bounding_box,
    with_search_term,
)
from contextual_news.store import ArticleFilter, ArticleStore


class _StoreStrategy:
    name: str = ""
    priority: int = 0

    def __init__(self, store: ArticleStore) -> None:
        self._store = store

    async def _find(self, article_filter: ArticleFilter, limit: int) -> list[NewsArticle]:
        return await self._store.find_by_filter(article_filter, limit=limit)

    def _by_relevance(self, articles: list[NewsArticle]) -> list[RetrievedArticle]:
        return [
            RetrievedArticle(article, self.name, stored_relevance(article.relevance_score))
            for article in articles
        ]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(priority={self.priority})"


class CategoryStrategy(_StoreStrategy):
    """Articles in the parsed category."""

    name = "category"
    priority = 10

    def supports(self, context: RetrievalContext) -> bool:
        parsed = context.parsed_query
        return parsed.has_intent(QueryIntent.CATEGORY) and parsed.filters.category is not None

    async def retrieve(self, context: RetrievalContext, limit: int) -> list[RetrievedArticle]:
        if context.parsed_query.filters.category is None:
            return []
        article_filter = with_nearby_bounding_box(context, base_filter(context.parsed_query))
        return self._by_relevance(await self._find(article_filter, limit))


class SourceStrategy(_StoreStrategy):
    """Articles from the parsed publisher."""

    name = "source"
    priority = 20

    def supports(self, context: RetrievalContext) -> bool:
        parsed = context.parsed_query
        return parsed.has_intent(QueryIntent.SOURCE) and parsed.filters.source is not None

    async def retrieve(self, context: RetrievalContext, limit: int) -> list[RetrievedArticle]:
        if context.parsed_query.filters.source is None:
            return []
        article_filter = with_nearby_bounding_box(context, base_filter(context.parsed_query))
        return self._by_relevance(await self._find(article_filter, limit))


class ScoreStrategy(_StoreStrategy):
    """Articles whose stored relevance clears the threshold."""

    name = "score"
    priority = 30

    def supports(self, context: RetrievalContext) -> bool:
        parsed = context.parsed_query
        return parsed.has_intent(QueryIntent.SCORE) and parsed.filters.score_threshold is not None

    async def retrieve(self, context: RetrievalContext, limit: int) -> list[RetrievedArticle]:
        if context.parsed_query.filters.score_threshold is None:
            return []
        article_filter = with_nearby_bounding_box(context, base_filter(context.parsed_query))
        return self._by_relevance(await self._find(article_filter, limit))


class NearbyStrategy(_StoreStrategy):
    """Articles around the resolved location, scored by closeness."""

    name = "nearby"
    priority = 40

    def supports(self, context: RetrievalContext) -> bool:
        return (
            context.parsed_query.has_intent(QueryIntent.NEARBY)
            and context.resolve_latitude() is not None
            and context.resolve_longitude() is not None
        )

    async def retrieve(self, context: RetrievalContext, limit: int) -> list[RetrievedArticle]:
        latitude = context.resolve_latitude()
        longitude = context.resolve_longitude()
        if latitude is None or longitude is None:
            return []
        radius_km = context.resolve_radius_km()
        article_filter = with_nearby_bounding_box(context, base_filter(context.parsed_query))

        results = []
        for article in await self._find(article_filter, limit):
            if not article.has_coordinates:
                continue
            distance = distance_km(latitude, longitude, article.latitude, article.longitude)  # type: ignore[arg-type]
            proximity = max(0.0, 1.0 - min(distance / radius_km, 1.0)) if radius_km > 0 else 0.0
            results.append(RetrievedArticle(article, self.name, proximity))
        return results


class SearchStrategy(_StoreStrategy):
    """Text match on the parsed search query, or the raw query text."""

    name = "search"
    priority = 50

    def supports(self, context: RetrievalContext) -> bool:
        parsed = context.parsed_query
        return parsed.has_intent(QueryIntent.SEARCH) or parsed.search_query is not None

    async def retrieve(self, context: RetrievalContext, limit: int) -> list[RetrievedArticle]:
        term = context.parsed_query.search_query
        if term is None or not term.strip():
            term = context.request.query
        if not term or not term.strip():
            return []
        article_filter = with_nearby_bounding_box(context, base_filter(context.parsed_query))
        article_filter = with_search_term(article_filter, term)
        return self._by_relevance(await self._find(article_filter, limit))


def default_strategies(store: ArticleStore) -> list[_StoreStrategy]:
    """The five built-in strategies in priority order."""
    return [
        CategoryStrategy(store),
        SourceStrategy(store),
        ScoreStrategy(store),
        NearbyStrategy(store),
        SearchStrategy(store),
    ]
