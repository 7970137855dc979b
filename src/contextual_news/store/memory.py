"""Dictionary-backed stores for local runs and tests."""

import copy
import logging
from collections.abc import Iterable
from uuid import UUID

from contextual_news.data import ArticleTrendAggregate, NewsArticle
from contextual_news.geo import BucketKey
from contextual_news.store.filters import DEFAULT_ORDER, ArticleFilter, sort_articles

logger = logging.getLogger(__name__)


class InMemoryArticleStore:
    """Article store keeping every article in a dict keyed by id."""

    def __init__(self, articles: Iterable[NewsArticle] = ()) -> None:
        self._articles: dict[UUID, NewsArticle] = {a.id: a for a in articles}

    async def find_by_filter(
        self,
        article_filter: ArticleFilter,
        *,
        order_by: tuple[str, ...] = DEFAULT_ORDER,
        limit: int = 10,
    ) -> list[NewsArticle]:
        if limit <= 0:
            return []
        matching = [a for a in self._articles.values() if article_filter.matches(a)]
        return sort_articles(matching, order_by)[:limit]

    async def find_by_id(self, article_id: UUID) -> NewsArticle | None:
        return self._articles.get(article_id)

    async def find_all_by_id(self, article_ids: Iterable[UUID]) -> list[NewsArticle]:
        return [self._articles[i] for i in article_ids if i in self._articles]

    async def count(self) -> int:
        return len(self._articles)

    async def save(self, article: NewsArticle) -> NewsArticle:
        self._articles[article.id] = article
        return article

    async def save_all(self, articles: Iterable[NewsArticle]) -> list[NewsArticle]:
        saved = [await self.save(a) for a in articles]
        logger.debug("Saved %d articles", len(saved))
        return saved


class InMemoryTrendStore:
    """Trend aggregate store keyed by (bucket, article id).

    Aggregates are copied on the way in and out so callers never share
    mutable state with the store.
    """

    def __init__(self) -> None:
        self._aggregates: dict[tuple[BucketKey, UUID], ArticleTrendAggregate] = {}

    async def find_by_id(self, bucket: BucketKey, article_id: UUID) -> ArticleTrendAggregate | None:
        found = self._aggregates.get((bucket, article_id))
        return copy.copy(found) if found is not None else None

    async def find_by_bucket_ids(self, buckets: Iterable[BucketKey]) -> list[ArticleTrendAggregate]:
        wanted = set(buckets)
        return [copy.copy(a) for (bucket, _), a in self._aggregates.items() if bucket in wanted]

    async def save(self, aggregate: ArticleTrendAggregate) -> ArticleTrendAggregate:
        self._aggregates[(aggregate.bucket, aggregate.article_id)] = copy.copy(aggregate)
        return aggregate
