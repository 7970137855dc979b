"""Filter construction shared by the retrieval strategies."""

from dataclasses import replace

from contextual_news.data import ParsedQuery
from contextual_news.geo import bounding_box
from contextual_news.retrieval.base import RetrievalContext
from contextual_news.store import ArticleFilter


def _present(value: str | None) -> str | None:
    return value if value and value.strip() else None


def base_filter(parsed: ParsedQuery) -> ArticleFilter:
    """AND of the parsed category, source, score, date range and search query."""
    filters = parsed.filters
    search_query = _present(parsed.search_query)
    return ArticleFilter(
        category=_present(filters.category),
        source=_present(filters.source),
        min_score=filters.score_threshold,
        published_after=filters.date_from,
        published_before=filters.date_to,
        search_terms=(search_query,) if search_query else (),
    )


def with_nearby_bounding_box(context: RetrievalContext, article_filter: ArticleFilter) -> ArticleFilter:
    """Restrict to the box around the resolved location, if there is one."""
    latitude = context.resolve_latitude()
    longitude = context.resolve_longitude()
    if latitude is None or longitude is None:
        return article_filter
    box = bounding_box(latitude, longitude, context.resolve_radius_km())
    return replace(article_filter, bounding_box=box)


def with_search_term(article_filter: ArticleFilter, term: str) -> ArticleFilter:
    if term in article_filter.search_terms:
        return article_filter
    return replace(article_filter, search_terms=(*article_filter.search_terms, term))


def stored_relevance(score: float | None) -> float:
    return score if score is not None else 0.0
