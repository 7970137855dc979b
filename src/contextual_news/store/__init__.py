"""Article and trend aggregate persistence."""

from contextual_news.store.base import ArticleStore, TrendAggregateStore
from contextual_news.store.filters import (
    DEFAULT_ORDER,
    SEARCH_STOP_WORDS,
    ArticleFilter,
    matches_search_term,
    sort_articles,
)
from contextual_news.store.loader import ArticleDocument, bootstrap_store, load_articles
from contextual_news.store.memory import InMemoryArticleStore, InMemoryTrendStore

__all__ = [
    "DEFAULT_ORDER",
    "SEARCH_STOP_WORDS",
    "ArticleDocument",
    "ArticleFilter",
    "ArticleStore",
    "InMemoryArticleStore",
    "InMemoryTrendStore",
    "TrendAggregateStore",
    "bootstrap_store",
    "load_articles",
    "matches_search_term",
    "sort_articles",
]
