"""Shared fixtures and builders for contextual_news tests."""

from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from contextual_news.data import NewsArticle
from contextual_news.store import InMemoryArticleStore

NOW = datetime(2025, 3, 25, 12, 0, tzinfo=UTC)


def fixed_clock() -> datetime:
    return NOW


def make_article(
    title: str = "Article",
    *,
    article_id: UUID | None = None,
    description: str | None = None,
    source_name: str | None = None,
    relevance_score: float | None = None,
    age: timedelta | None = timedelta(days=1),
    latitude: float | None = None,
    longitude: float | None = None,
    categories: tuple[str, ...] = (),
) -> NewsArticle:
    return NewsArticle(
        id=article_id or uuid4(),
        title=title,
        description=description,
        url=f"https://example.com/{title.lower().replace(' ', '-')}",
        publication_date=NOW - age if age is not None else None,
        source_name=source_name,
        relevance_score=relevance_score,
        latitude=latitude,
        longitude=longitude,
        categories=frozenset(categories),
    )


@pytest.fixture
def corpus() -> list[NewsArticle]:
    """A small mixed corpus: technology, business, sports, science."""
    return [
        make_article(
            "Chipmakers Rally On Demand",
            description="Semiconductor technology firms climbed after upbeat forecasts.",
            source_name="Reuters",
            relevance_score=0.88,
            categories=("technology", "business"),
        ),
        make_article(
            "Apple Unveils Chip Roadmap",
            description="Apple outlined its technology plans for custom silicon.",
            source_name="Reuters",
            relevance_score=0.82,
            latitude=37.3229,
            longitude=-122.0322,
            categories=("technology",),
        ),
        make_article(
            "Startups Bet On Open Models",
            description="Investors back technology startups building on open models.",
            source_name="New York Times",
            relevance_score=0.74,
            latitude=40.7128,
            longitude=-74.006,
            categories=("technology",),
        ),
        make_article(
            "Central Bank Holds Rates",
            description="Policymakers kept interest rates unchanged.",
            source_name="BBC",
            relevance_score=0.71,
            latitude=51.5074,
            longitude=-0.1278,
            categories=("business",),
        ),
        make_article(
            "Palo Alto Library Reopens",
            description="The neighbourhood library reopened with longer hours.",
            source_name="Palo Alto Weekly",
            relevance_score=0.31,
            latitude=37.4419,
            longitude=-122.143,
            categories=("general",),
        ),
        make_article(
            "Rover Finds Lake Sediments",
            description="Scientists say the samples point to an ancient lake.",
            source_name="BBC",
            relevance_score=0.69,
            categories=("science",),
        ),
    ]


@pytest.fixture
def store(corpus: list[NewsArticle]) -> InMemoryArticleStore:
    return InMemoryArticleStore(corpus)
