"""Tests for the rule-based query parser."""

from contextual_news.data import QueryIntent
from contextual_news.query import QueryContext, RuleBasedQueryParser
from contextual_news.query.rules import detect_category, extract_concepts, extract_entities


async def test_technology_news_is_category_and_search() -> None:
    parsed = await RuleBasedQueryParser().parse(QueryContext(query="technology news"))
    assert parsed.intents == frozenset({QueryIntent.CATEGORY, QueryIntent.SEARCH})
    assert parsed.filters.category == "technology"
    assert parsed.search_query == "technology news technology"
    assert parsed.fallback_used is False


async def test_source_detection() -> None:
    parsed = await RuleBasedQueryParser().parse(QueryContext(query="latest from the new york times"))
    assert QueryIntent.SOURCE in parsed.intents
    assert parsed.filters.source == "New York Times"
    assert parsed.search_query == "latest from the new york times New York Times"


async def test_proximity_words_add_nearby() -> None:
    parsed = await RuleBasedQueryParser().parse(QueryContext(query="events near me"))
    assert QueryIntent.NEARBY in parsed.intents


async def test_radius_adds_nearby_and_is_carried() -> None:
    context = QueryContext(query="events", latitude=37.4, longitude=-122.1, radius_km=15.0)
    parsed = await RuleBasedQueryParser().parse(context)
    assert QueryIntent.NEARBY in parsed.intents
    assert parsed.filters.radius_km == 15.0
    assert parsed.filters.latitude == 37.4
    assert parsed.filters.longitude == -122.1


async def test_score_words_and_threshold_add_score() -> None:
    parser = RuleBasedQueryParser()
    assert QueryIntent.SCORE in (await parser.parse(QueryContext(query="top ranked stories"))).intents
    parsed = await parser.parse(QueryContext(query="stories", score_threshold=0.7))
    assert QueryIntent.SCORE in parsed.intents
    assert parsed.filters.score_threshold == 0.7


async def test_plain_query_is_search_only() -> None:
    parsed = await RuleBasedQueryParser().parse(QueryContext(query="elections"))
    assert parsed.intents == frozenset({QueryIntent.SEARCH})
    assert parsed.filters.category is None


async def test_blank_query_falls_back() -> None:
    parsed = await RuleBasedQueryParser().parse(QueryContext(query="   "))
    assert parsed.fallback_used is True
    assert parsed.intents == frozenset({QueryIntent.SEARCH})
    assert parsed.search_query is None


def test_category_priority_is_deterministic() -> None:
    # "general" sits last so it never shadows a specific category
    assert detect_category("general technology outlook") == "technology"
    assert detect_category("business and sports") == "business"


def test_entities_are_capitalized_runs_in_order() -> None:
    text = "Elon Musk meets Sundar Pichai in New Delhi; Elon Musk speaks"
    assert extract_entities(text) == ["Elon Musk", "Sundar Pichai", "New Delhi"]


def test_entities_skip_short_tokens() -> None:
    assert extract_entities("AI in the UK by Al") == []


def test_concepts_first_ten_distinct_long_tokens() -> None:
    text = "the " + " ".join(f"word{i}" for i in range(12)) + " word0"
    concepts = extract_concepts(text)
    assert concepts == [f"word{i}" for i in range(10)]
    assert "the" not in concepts
