import logging
import os

import anthropic
from anthropic.types import TextBlock

from contextual_news.data import ArticleEnrichment, EnrichmentRequest
from contextual_news.enrichment.schema import (
    ENRICHMENT_SYSTEM_PROMPT,
    build_user_prompt,
    enrichment_from_payload,
)
from contextual_news.llm import DEFAULT_CLAUDE_MODEL, decode_json_object

logger = logging.getLogger(__name__)


class ClaudeEnricher:
    """Explain article relevance using Anthropic's Claude API.

    Args:
        model: Anthropic model ID to use.
        api_key: API key (defaults to CLAUDE_API_KEY env var).
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        *,
        model: str = DEFAULT_CLAUDE_MODEL,
        api_key: str | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._model = model
        resolved_key = api_key or os.environ.get("CLAUDE_API_KEY")
        self._client = anthropic.AsyncAnthropic(api_key=resolved_key, timeout=timeout, max_retries=0)

    async def enrich(self, request: EnrichmentRequest) -> ArticleEnrichment:
        response = await self._client.messages.create(
            model=self._model,
            max_tokens=512,
            system=ENRICHMENT_SYSTEM_PROMPT,
            messages=[{"role": "user", "content": build_user_prompt(request)}],
        )

        if not response.content:
            raise ValueError("Empty response from Claude")
        content_block = response.content[0]
        if not isinstance(content_block, TextBlock):
            raise ValueError(f"Expected TextBlock, got {type(content_block).__name__}")

        return enrichment_from_payload(decode_json_object(content_block.text))
