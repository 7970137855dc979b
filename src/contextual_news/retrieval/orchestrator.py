"""Multi-strategy candidate retrieval."""

import asyncio
import logging
from collections.abc import Sequence
from uuid import UUID

from contextual_news.data import RetrievedArticle
from contextual_news.retrieval.base import RetrievalContext, RetrievalStrategy

logger = logging.getLogger(__name__)

OVER_FETCH_FACTOR = 3
FALLBACK_STRATEGY = "search"


class RetrievalOrchestrator:
    """Run every supporting strategy and merge their candidates.

    Flow:
    1. Each strategy whose ``supports`` holds is asked for ``limit * 3``
       candidates; strategies run concurrently.
    2. Results are merged in priority order (lower first); the first
       strategy to produce an article keeps it.
    3. If nothing was found, the ``search`` strategy runs once regardless
       of ``supports``.
    4. The merged list is truncated to ``limit * 3``.

    Args:
        strategies: Retrieval strategies; sorted by priority here.
    """

    def __init__(self, strategies: Sequence[RetrievalStrategy]) -> None:
        self._strategies = sorted(strategies, key=lambda s: s.priority)
        names = [s.name for s in self._strategies]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate strategy names: {names}")

    @property
    def strategies(self) -> list[RetrievalStrategy]:
        return list(self._strategies)

    async def retrieve(self, context: RetrievalContext, limit: int) -> list[RetrievedArticle]:
        """Collect deduplicated candidates for a query.

        Args:
            context: Request and filter-merged parsed query.
            limit: Number of results the caller will finally return.

        Returns:
            At most ``limit * 3`` candidates in strategy-priority order.
        """
        fetch_limit = max(limit, 1) * OVER_FETCH_FACTOR
        active = [s for s in self._strategies if s.supports(context)]
        logger.debug("Running strategies %s", [s.name for s in active])

        results = await asyncio.gather(
            *(s.retrieve(context, fetch_limit) for s in active), return_exceptions=True
        )

        merged: dict[UUID, RetrievedArticle] = {}
        for strategy, result in zip(active, results, strict=True):
            if isinstance(result, BaseException):
                logger.warning(f"Error in {strategy.name} retrieval: {str(result)}")
                continue
            self._merge(merged, result)

        if not merged:
            fallback = self._strategy_named(FALLBACK_STRATEGY)
            if fallback is not None:
                logger.debug("No candidates, forcing %s strategy", FALLBACK_STRATEGY)
                self._merge(merged, await fallback.retrieve(context, fetch_limit))

        candidates = list(merged.values())[:fetch_limit]
        logger.info(f"Retrieved {len(candidates)} candidates from {len(active)} strategies")
        return candidates

    @staticmethod
    def _merge(merged: dict[UUID, RetrievedArticle], retrieved: list[RetrievedArticle]) -> None:
        for candidate in retrieved:
            merged.setdefault(candidate.article.id, candidate)

    def _strategy_named(self, name: str) -> RetrievalStrategy | None:
        return next((s for s in self._strategies if s.name == name), None)
