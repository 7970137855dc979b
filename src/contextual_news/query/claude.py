import logging
import os

import anthropic
from anthropic.types import TextBlock

from contextual_news.data import ParsedQuery
from contextual_news.llm import DEFAULT_CLAUDE_MODEL, decode_json_object
from contextual_news.query.base import QueryContext
from contextual_news.query.schema import (
    QUERY_SYSTEM_PROMPT,
    build_user_prompt,
    parsed_query_from_payload,
)

logger = logging.getLogger(__name__)


class ClaudeQueryParser:
    """Extract query intent and filters using Anthropic's Claude API.

    Any failure (network, timeout, malformed reply) propagates; callers are
    expected to fall back to the rule-based parser.

    Args:
        model: Anthropic model ID to use.
        api_key: API key (defaults to CLAUDE_API_KEY env var).
        timeout: Request timeout in seconds.
        system_prompt: Custom system prompt. If *None*, the built-in one
            is used. It must ask for a single JSON object.
    """

    def __init__(
        self,
        *,
        model: str = DEFAULT_CLAUDE_MODEL,
        api_key: str | None = None,
        timeout: float = 10.0,
        system_prompt: str | None = None,
    ) -> None:
        self._model = model
        resolved_key = api_key or os.environ.get("CLAUDE_API_KEY")
        self._client = anthropic.AsyncAnthropic(api_key=resolved_key, timeout=timeout, max_retries=0)
        self._system_prompt = system_prompt or QUERY_SYSTEM_PROMPT

    async def parse(self, context: QueryContext) -> ParsedQuery:
        response = await self._client.messages.create(
            model=self._model,
            max_tokens=1024,
            system=self._system_prompt,
            messages=[{"role": "user", "content": build_user_prompt(context)}],
        )

        if not response.content:
            raise ValueError("Empty response from Claude")
        content_block = response.content[0]
        if not isinstance(content_block, TextBlock):
            raise ValueError(f"Expected TextBlock, got {type(content_block).__name__}")

        payload = decode_json_object(content_block.text)
        logger.debug("Claude parsed query %r: %s", context.query, payload)
        return parsed_query_from_payload(payload)
