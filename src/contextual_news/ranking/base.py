"""Protocol for candidate ranking."""

from typing import Protocol

from contextual_news.data import ArticleScore, RetrievedArticle
from contextual_news.retrieval import RetrievalContext


class ArticleRanker(Protocol):
    """Interface for scoring and ordering retrieved candidates."""

    def score(
        self,
        candidates: list[RetrievedArticle],
        context: RetrievalContext,
    ) -> list[ArticleScore]:
        """Score every candidate and sort best first.

        Args:
            candidates: Deduplicated retrieval output.
            context: Request and parsed query the candidates answer.

        Returns:
            One ArticleScore per candidate, ``final_score`` descending.
        """
        ...
