"""Protocols for article and trend aggregate persistence."""

from collections.abc import Iterable
from typing import Protocol
from uuid import UUID

from contextual_news.data import ArticleTrendAggregate, NewsArticle
from contextual_news.geo import BucketKey
from contextual_news.store.filters import DEFAULT_ORDER, ArticleFilter


class ArticleStore(Protocol):
    """Interface for filterable, sorted, paginated article lookups."""

    async def find_by_filter(
        self,
        article_filter: ArticleFilter,
        *,
        order_by: tuple[str, ...] = DEFAULT_ORDER,
        limit: int = 10,
    ) -> list[NewsArticle]:
        """Return up to ``limit`` articles matching every predicate.

        Args:
            article_filter: Predicates to AND together.
            order_by: Field names, ``-`` prefix for descending.
            limit: Maximum number of articles.

        Returns:
            Matching articles in the requested order.
        """
        ...

    async def find_by_id(self, article_id: UUID) -> NewsArticle | None: ...

    async def find_all_by_id(self, article_ids: Iterable[UUID]) -> list[NewsArticle]: ...

    async def count(self) -> int: ...

    async def save(self, article: NewsArticle) -> NewsArticle: ...

    async def save_all(self, articles: Iterable[NewsArticle]) -> list[NewsArticle]: ...


class TrendAggregateStore(Protocol):
    """Interface for per-(bucket, article) trend aggregates."""

    async def find_by_id(self, bucket: BucketKey, article_id: UUID) -> ArticleTrendAggregate | None: ...

    async def find_by_bucket_ids(self, buckets: Iterable[BucketKey]) -> list[ArticleTrendAggregate]: ...

    async def save(self, aggregate: ArticleTrendAggregate) -> ArticleTrendAggregate: ...
