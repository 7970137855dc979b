"""Deterministic keyword-based query parser used when no language model is available."""

import re

from contextual_news.data import ParsedQuery, QueryFilters, QueryIntent
from contextual_news.query.base import QueryContext

ENTITY_PATTERN = re.compile(r"\b([A-Z][a-zA-Z]+(?:\s+[A-Z][a-zA-Z]+)*)\b")

# Checked in order; the first category found in the query wins.
KNOWN_CATEGORIES: tuple[str, ...] = (
    "technology",
    "business",
    "sports",
    "entertainment",
    "health",
    "science",
    "politics",
    "world",
    "general",
)

# (lower-case needle, canonical source name)
KNOWN_SOURCES: tuple[tuple[str, str], ...] = (
    ("new york times", "New York Times"),
    ("reuters", "Reuters"),
    ("bbc", "BBC"),
)

PROXIMITY_WORDS: tuple[str, ...] = ("near", "around", "close to")
SCORE_WORDS: tuple[str, ...] = ("score", "rank")

MAX_CONCEPTS = 10


def extract_entities(text: str | None) -> list[str]:
    """Naive named entities: runs of capitalized words, first occurrence order."""
    if not text:
        return []
    entities: list[str] = []
    for match in ENTITY_PATTERN.finditer(text):
        candidate = match.group(1).strip()
        if len(candidate) > 2 and candidate not in entities:
            entities.append(candidate)
    return entities


def extract_concepts(normalized: str) -> list[str]:
    """First distinct lower-case tokens longer than three characters."""
    concepts: list[str] = []
    for token in normalized.split():
        if len(token) > 3 and token not in concepts:
            concepts.append(token)
            if len(concepts) == MAX_CONCEPTS:
                break
    return concepts


def detect_category(normalized: str) -> str | None:
    return next((c for c in KNOWN_CATEGORIES if c in normalized), None)


def detect_source(normalized: str) -> str | None:
    return next((name for needle, name in KNOWN_SOURCES if needle in normalized), None)


class RuleBasedQueryParser:
    """Parse queries with fixed vocabularies and substring matching.

    Never calls out to anything and never fails; output depends only on
    the context it is given.
    """

    async def parse(self, context: QueryContext) -> ParsedQuery:
        return self.parse_sync(context)

    def parse_sync(self, context: QueryContext) -> ParsedQuery:
        query = context.query or ""
        if not query.strip():
            return ParsedQuery.fallback("")
        normalized = query.lower()
        intents: set[QueryIntent] = set()

        category = detect_category(normalized)
        if category is not None:
            intents.add(QueryIntent.CATEGORY)

        source = detect_source(normalized)
        if source is not None:
            intents.add(QueryIntent.SOURCE)

        if any(word in normalized for word in PROXIMITY_WORDS) or context.radius_km is not None:
            intents.add(QueryIntent.NEARBY)

        if any(word in normalized for word in SCORE_WORDS) or context.score_threshold is not None:
            intents.add(QueryIntent.SCORE)

        intents.add(QueryIntent.SEARCH)

        filters = QueryFilters(
            category=category,
            source=source,
            score_threshold=context.score_threshold,
            radius_km=context.radius_km,
            latitude=context.latitude,
            longitude=context.longitude,
        )
        search_query = " ".join(part for part in (query, category, source) if part)

        return ParsedQuery.create(
            entities=extract_entities(query),
            concepts=extract_concepts(normalized),
            intents=intents,
            filters=filters,
            search_query=search_query,
        )
