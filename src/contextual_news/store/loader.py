"""JSON corpus loading."""

import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from contextual_news.data import NewsArticle
from contextual_news.store.base import ArticleStore

logger = logging.getLogger(__name__)


class ArticleDocument(BaseModel):
    """One article record as it appears in the corpus file."""

    id: UUID
    title: str
    description: str | None = None
    url: str | None = None
    publication_date: datetime | None = None
    source_name: str | None = None
    category: list[str] = Field(default_factory=list)
    relevance_score: float | None = None
    latitude: float | None = None
    longitude: float | None = None

    @field_validator("publication_date", mode="before")
    @classmethod
    def blank_date_is_none(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("category", mode="before")
    @classmethod
    def null_category_is_empty(cls, v: object) -> object:
        return [] if v is None else v

    def to_article(self) -> NewsArticle:
        published = self.publication_date
        # Timestamps without an offset are UTC.
        if published is not None and published.tzinfo is None:
            published = published.replace(tzinfo=UTC)
        return NewsArticle(
            id=self.id,
            title=self.title,
            description=self.description,
            url=self.url,
            publication_date=published,
            source_name=self.source_name,
            relevance_score=self.relevance_score,
            latitude=self.latitude,
            longitude=self.longitude,
            categories=frozenset(self.category),
        )


def load_articles(path: Path | str) -> list[NewsArticle]:
    """Read a JSON array of article documents.

    Raises:
        FileNotFoundError: If the corpus file doesn't exist.
        pydantic.ValidationError: If a record is malformed.
    """
    path = Path(path)
    with path.open(encoding="utf-8") as f:
        raw = json.load(f)
    return [ArticleDocument.model_validate(item).to_article() for item in raw]


async def bootstrap_store(store: ArticleStore, path: Path | str) -> int:
    """Load the corpus into an empty store; return the number of articles ingested."""
    if await store.count() > 0:
        logger.info("News articles already present, skipping bootstrap")
        return 0
    articles = load_articles(path)
    await store.save_all(articles)
    logger.info("Ingested %d news articles", len(articles))
    return len(articles)
