"""Query understanding: raw text to structured intents and filters."""

from contextual_news.query.base import QueryContext, QueryParser
from contextual_news.query.claude import ClaudeQueryParser
from contextual_news.query.ollama import OllamaQueryParser
from contextual_news.query.rules import RuleBasedQueryParser, extract_entities
from contextual_news.query.schema import parsed_query_from_payload
from contextual_news.query.understanding import QueryUnderstanding

__all__ = [
    "ClaudeQueryParser",
    "OllamaQueryParser",
    "QueryContext",
    "QueryParser",
    "QueryUnderstanding",
    "RuleBasedQueryParser",
    "extract_entities",
    "parsed_query_from_payload",
]
