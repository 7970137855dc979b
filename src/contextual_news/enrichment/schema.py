"""Prompt and response schema for language-model enrichment."""

from typing import Any

from contextual_news.data import ArticleEnrichment, EnrichmentRequest
from contextual_news.llm import optional_str, string_list

ENRICHMENT_SYSTEM_PROMPT = """\
You are a news assistant. Given a news article and a reader's query, explain \
briefly why the article is relevant. Respond ONLY with a JSON object (no \
markdown fences, no commentary) with these fields:
- "summary": one or two sentence summary of the article
- "key_entities": array of up to five named entities from the article
- "why_relevant": one sentence on why the article answers the query

Omit any field you cannot determine.\
"""


def build_user_prompt(request: EnrichmentRequest) -> str:
    article = request.article
    parts = ["Article:"]
    parts.append(f"  Title: {article.title}")
    if article.description:
        parts.append(f"  Description: {article.description}")
    if article.source_name:
        parts.append(f"  Publisher: {article.source_name}")
    if article.publication_date:
        parts.append(f"  Published: {article.publication_date.isoformat()}")
    if article.has_coordinates:
        parts.append(f"  Location: lat={article.latitude}, lon={article.longitude}")
    parts.append(f"  Matched by: {request.score.match_reason}")
    if request.user_query:
        parts.append(f'Reader query: "{request.user_query}"')
    if request.user_latitude is not None and request.user_longitude is not None:
        parts.append(f"Reader location: lat={request.user_latitude}, lon={request.user_longitude}")
    return "\n".join(parts)


def enrichment_from_payload(payload: dict[str, Any]) -> ArticleEnrichment:
    """Build an ArticleEnrichment from a decoded model reply; blanks become unset."""
    summary = optional_str(payload.get("summary"))
    why_relevant = optional_str(payload.get("why_relevant"))
    return ArticleEnrichment(
        summary=summary if summary and summary.strip() else None,
        key_entities=tuple(e for e in string_list(payload.get("key_entities")) if e.strip()),
        why_relevant=why_relevant if why_relevant and why_relevant.strip() else None,
    )
