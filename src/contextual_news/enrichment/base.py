"""Protocol for article enrichment."""

from typing import Protocol

from contextual_news.data import ArticleEnrichment, EnrichmentRequest


class Enricher(Protocol):
    """Interface for explaining why a ranked article matches a query."""

    async def enrich(self, request: EnrichmentRequest) -> ArticleEnrichment:
        """Produce a summary, key entities and relevance explanation.

        Args:
            request: The article, the user's query and location, and its score.

        Returns:
            Enrichment for the article. Fields may be absent.
        """
        ...
