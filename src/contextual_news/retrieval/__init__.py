"""Candidate retrieval through independent, priority-ordered strategies."""

from contextual_news.retrieval.base import RetrievalContext, RetrievalStrategy
from contextual_news.retrieval.orchestrator import RetrievalOrchestrator
from contextual_news.retrieval.strategies import (
    CategoryStrategy,
    NearbyStrategy,
    ScoreStrategy,
    SearchStrategy,
    SourceStrategy,
    default_strategies,
)

__all__ = [
    "CategoryStrategy",
    "NearbyStrategy",
    "RetrievalContext",
    "RetrievalOrchestrator",
    "RetrievalStrategy",
    "ScoreStrategy",
    "SearchStrategy",
    "SourceStrategy",
    "default_strategies",
]
