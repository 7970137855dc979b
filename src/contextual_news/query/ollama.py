from contextual_news.data import ParsedQuery
from contextual_news.llm import OllamaChatClient
from contextual_news.query.base import QueryContext
from contextual_news.query.schema import (
    QUERY_SYSTEM_PROMPT,
    build_user_prompt,
    parsed_query_from_payload,
)


class OllamaQueryParser:
    """Extract query intent and filters with a locally served Ollama model."""

    def __init__(self, client: OllamaChatClient) -> None:
        self._client = client

    async def parse(self, context: QueryContext) -> ParsedQuery:
        payload = await self._client.complete_json(QUERY_SYSTEM_PROMPT, build_user_prompt(context))
        return parsed_query_from_payload(payload)
