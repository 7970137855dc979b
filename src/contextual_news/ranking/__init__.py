"""Candidate ranking."""

from contextual_news.ranking.base import ArticleRanker
from contextual_news.ranking.weighted import (
    RankingWeights,
    WeightedRanker,
    match_reason,
    normalize_relevance,
    recency_contribution,
    semantic_contribution,
    tokenize,
)

__all__ = [
    "ArticleRanker",
    "RankingWeights",
    "WeightedRanker",
    "match_reason",
    "normalize_relevance",
    "recency_contribution",
    "semantic_contribution",
    "tokenize",
]
