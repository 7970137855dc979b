"""Synthetic interaction traffic for demos and local runs."""

import asyncio
import logging
import random
from collections.abc import Callable
from datetime import UTC, datetime

from contextual_news.data import ArticleTrendAggregate, EventType, Location, TrendingEventRequest
from contextual_news.store import ArticleFilter, ArticleStore
from contextual_news.trending.aggregator import TrendingAggregator

logger = logging.getLogger(__name__)


class TrendingEventSimulator:
    """Record random view/click/share events on random located articles.

    Args:
        aggregator: Aggregator receiving the events.
        articles: Store to draw articles from.
        skip_probability: Chance that a :meth:`run` tick records nothing.
        rng: Random source; seed it for reproducible runs.
        clock: Returns the current time.
    """

    def __init__(
        self,
        aggregator: TrendingAggregator,
        articles: ArticleStore,
        *,
        skip_probability: float = 0.5,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._aggregator = aggregator
        self._articles = articles
        self._skip_probability = skip_probability
        self._rng = rng or random.Random()
        self._clock = clock or (lambda: datetime.now(UTC))

    async def random_event(self) -> TrendingEventRequest:
        """Build an event for a random article that has coordinates.

        Raises:
            LookupError: If no stored article has coordinates.
        """
        total = await self._articles.count()
        candidates = [
            a for a in await self._articles.find_by_filter(ArticleFilter(), limit=total) if a.has_coordinates
        ]
        if not candidates:
            raise LookupError("No located articles available for simulation")
        article = self._rng.choice(candidates)
        return TrendingEventRequest(
            event_type=self._rng.choice(list(EventType)),
            article_id=article.id,
            user_location=Location(latitude=article.latitude, longitude=article.longitude),
            occurred_at=self._clock(),
        )

    async def simulate_once(self) -> ArticleTrendAggregate:
        event = await self.random_event()
        aggregate = await self._aggregator.record_event(event)
        logger.debug(f"Simulated {event.event_type} on {event.article_id}")
        return aggregate

    async def run(self, interval_seconds: float, *, max_ticks: int | None = None) -> int:
        """Tick every ``interval_seconds``, skipping ticks at random.

        Args:
            interval_seconds: Delay between ticks.
            max_ticks: Stop after this many ticks; run until cancelled if *None*.

        Returns:
            Number of events recorded.
        """
        recorded = 0
        ticks = 0
        while max_ticks is None or ticks < max_ticks:
            ticks += 1
            if self._rng.random() >= self._skip_probability:
                try:
                    await self.simulate_once()
                    recorded += 1
                except LookupError as e:
                    logger.debug(f"Skipping simulated event: {e}")
            await asyncio.sleep(interval_seconds)
        return recorded
