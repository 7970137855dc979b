"""Prompt and response schema for language-model query parsing."""

from typing import Any

from contextual_news.data import ParsedQuery, QueryFilters, QueryIntent
from contextual_news.llm import optional_float, optional_str, string_list
from contextual_news.query.base import QueryContext

QUERY_SYSTEM_PROMPT = """\
You are an AI that extracts structured filters and intent from news search \
queries. Respond ONLY with a JSON object (no markdown fences, no commentary) \
with these fields:
- "intent": the primary intent, one of: category, source, score, nearby, search
- "additional_intents": array of further intents from the same list
- "entities": array of named entities (people, organizations, places)
- "concepts": array of key topical concepts
- "search_query": a concise keyword query for full-text search
- "filters": object with optional "category" (one of: general, technology, \
business, sports, entertainment, health, science, politics, world), "source" \
(publisher name), "score_threshold" (number 0-1), "radius_km" (number), \
"latitude" (number), "longitude" (number)

Omit any field you cannot determine.\
"""


def build_user_prompt(context: QueryContext) -> str:
    lines = [f'Query: "{context.query}"']
    if context.latitude is not None and context.longitude is not None:
        lines.append(f"User location: lat={context.latitude}, lon={context.longitude}")
    if context.radius_km is not None:
        lines.append(f"Radius hint: {context.radius_km} km")
    lines.append("Return JSON matching the schema.")
    return "\n".join(lines)


def _clamp_unit(value: float | None) -> float | None:
    if value is None:
        return None
    return max(0.0, min(1.0, value))


def parsed_query_from_payload(payload: dict[str, Any]) -> ParsedQuery:
    """Build a ParsedQuery from a decoded model reply.

    Absent or mistyped fields are treated as unset. Unrecognized intents
    become ``UNKNOWN``; ``SEARCH`` is always present in the result.
    """
    intents: set[QueryIntent] = set()
    intent = optional_str(payload.get("intent"))
    if intent is not None:
        intents.add(QueryIntent.from_string(intent))
    for extra in string_list(payload.get("additional_intents")):
        intents.add(QueryIntent.from_string(extra))

    raw_filters = payload.get("filters")
    filters = QueryFilters()
    if isinstance(raw_filters, dict):
        filters = QueryFilters(
            category=optional_str(raw_filters.get("category")),
            source=optional_str(raw_filters.get("source")),
            score_threshold=_clamp_unit(optional_float(raw_filters.get("score_threshold"))),
            radius_km=optional_float(raw_filters.get("radius_km")),
            latitude=optional_float(raw_filters.get("latitude")),
            longitude=optional_float(raw_filters.get("longitude")),
        )

    return ParsedQuery.create(
        entities=string_list(payload.get("entities")),
        concepts=string_list(payload.get("concepts")),
        intents=intents,
        filters=filters,
        search_query=optional_str(payload.get("search_query")),
        fallback_used=False,
    )
