from contextual_news.data import ArticleEnrichment, EnrichmentRequest
from contextual_news.enrichment.schema import (
    ENRICHMENT_SYSTEM_PROMPT,
    build_user_prompt,
    enrichment_from_payload,
)
from contextual_news.llm import OllamaChatClient


class OllamaEnricher:
    """Explain article relevance with a locally served Ollama model."""

    def __init__(self, client: OllamaChatClient) -> None:
        self._client = client

    async def enrich(self, request: EnrichmentRequest) -> ArticleEnrichment:
        payload = await self._client.complete_json(ENRICHMENT_SYSTEM_PROMPT, build_user_prompt(request))
        return enrichment_from_payload(payload)
