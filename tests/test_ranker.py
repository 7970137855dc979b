"""Tests for the weighted ranker."""

from datetime import timedelta
from uuid import UUID

import pytest
from conftest import NOW, fixed_clock, make_article

from contextual_news.data import (
    Location,
    NewsArticle,
    NewsQueryRequest,
    ParsedQuery,
    QueryIntent,
    RetrievedArticle,
)
from contextual_news.ranking import RankingWeights, WeightedRanker
from contextual_news.ranking.weighted import (
    match_reason,
    recency_contribution,
    semantic_contribution,
    tokenize,
)
from contextual_news.retrieval import RetrievalContext


def _context(
    query: str = "news",
    *,
    location: Location | None = None,
    intents: set[QueryIntent] | None = None,
    search_query: str | None = None,
) -> RetrievalContext:
    return RetrievalContext(
        request=NewsQueryRequest(query=query, user_location=location),
        parsed_query=ParsedQuery.create(intents=intents, search_query=search_query),
    )


def _candidates(articles: list[NewsArticle], strategy: str = "search") -> list[RetrievedArticle]:
    return [RetrievedArticle(a, strategy, a.relevance_score or 0.0) for a in articles]


class TestContributions:
    def test_recency_half_life(self) -> None:
        assert recency_contribution(NOW - timedelta(days=7), NOW, 7.0) == pytest.approx(0.5)
        assert recency_contribution(NOW - timedelta(days=14), NOW, 7.0) == pytest.approx(0.25)

    def test_recency_edges(self) -> None:
        assert recency_contribution(None, NOW, 7.0) == 0.0
        assert recency_contribution(NOW + timedelta(days=1), NOW, 7.0) == 1.0
        # less than an hour old truncates to zero hours
        assert recency_contribution(NOW - timedelta(minutes=59), NOW, 7.0) == 1.0

    def test_tokenize(self) -> None:
        assert tokenize("AI-driven chips, at scale!") == {"driven", "chips", "scale"}
        assert tokenize("   ") == set()
        assert tokenize(None) == set()

    def test_semantic_is_jaccard(self) -> None:
        article = make_article("Apple Unveils Chip Roadmap")
        parsed = ParsedQuery.create()
        assert semantic_contribution(parsed, "apple chip", article) == pytest.approx(2 / 4)

    def test_semantic_includes_search_query(self) -> None:
        article = make_article("Apple Unveils Chip Roadmap")
        parsed = ParsedQuery.create(search_query="roadmap")
        assert semantic_contribution(parsed, "apple chip", article) == pytest.approx(3 / 4)

    def test_semantic_empty_query(self) -> None:
        assert semantic_contribution(ParsedQuery.create(), "a an", make_article("Apple")) == 0.0

    def test_match_reason_keeps_strategy_name(self) -> None:
        with_intent = ParsedQuery.create(intents={QueryIntent.CATEGORY})
        assert match_reason(with_intent, "category") == "category"
        assert match_reason(ParsedQuery.create(), "category") == "category"
        assert match_reason(with_intent, "trending") == "trending"


class TestWeightedRanker:
    def test_relevance_only_orders_by_relevance(self, corpus: list[NewsArticle]) -> None:
        ranker = WeightedRanker(RankingWeights(relevance=1.0, recency=0.0, semantic=0.0, proximity=0.0), fixed_clock)
        scores = ranker.score(_candidates(corpus), _context())

        assert [s.final_score for s in scores] == sorted(
            (a.relevance_score for a in corpus), reverse=True
        )
        assert scores == sorted(scores, key=lambda s: s.final_score, reverse=True)

    def test_final_is_weighted_sum(self) -> None:
        article = make_article("Apple Unveils Chip Roadmap", relevance_score=0.8, age=timedelta(days=7))
        [score] = WeightedRanker(clock=fixed_clock).score(_candidates([article]), _context("apple chip"))

        assert score.relevance_contribution == pytest.approx(0.8)
        assert score.recency_contribution == pytest.approx(0.5)
        assert score.semantic_contribution == pytest.approx(0.5)
        assert score.proximity_contribution == 0.0
        assert score.final_score == pytest.approx(0.35 * 0.8 + 0.25 * 0.5 + 0.30 * 0.5)

    def test_contributions_in_unit_range(self, corpus: list[NewsArticle]) -> None:
        odd = make_article("Odd", relevance_score=1.7, age=None)
        scores = WeightedRanker(clock=fixed_clock).score(_candidates([*corpus, odd]), _context("technology"))
        for s in scores:
            for value in (
                s.relevance_contribution,
                s.recency_contribution,
                s.semantic_contribution,
                s.proximity_contribution,
            ):
                assert 0.0 <= value <= 1.0

    def test_proximity_only_for_nearby_with_location(self) -> None:
        article = make_article("Local", latitude=37.44, longitude=-122.14)
        here = Location(latitude=37.44, longitude=-122.14)
        nearby = [RetrievedArticle(article, "nearby", 0.9)]
        ranker = WeightedRanker(clock=fixed_clock)

        [with_location] = ranker.score(nearby, _context(location=here, intents={QueryIntent.NEARBY}))
        [without_location] = ranker.score(nearby, _context(intents={QueryIntent.NEARBY}))
        [other_strategy] = ranker.score(
            [RetrievedArticle(article, "search", 0.9)], _context(location=here)
        )

        assert with_location.proximity_contribution == pytest.approx(0.9)
        assert with_location.match_reason == "nearby"
        assert without_location.proximity_contribution == 0.0
        assert other_strategy.proximity_contribution == 0.0

    def test_distance_needs_both_locations(self) -> None:
        located = make_article("Located", latitude=51.5074, longitude=-0.1278)
        unlocated = make_article("Unlocated")
        context = _context(location=Location(latitude=48.8566, longitude=2.3522))

        scores = {s.article.title: s for s in WeightedRanker(clock=fixed_clock).score(
            _candidates([located, unlocated]), context
        )}

        assert scores["Located"].distance_km == pytest.approx(343.5, abs=2.0)
        assert scores["Unlocated"].distance_km is None

    def test_ties_broken_by_id(self) -> None:
        ids = [UUID(f"00000000-0000-0000-0000-00000000000{i}") for i in (3, 1, 2)]
        articles = [make_article("Same", article_id=i, relevance_score=0.5) for i in ids]

        scores = WeightedRanker(clock=fixed_clock).score(_candidates(articles), _context())

        assert [str(s.article.id)[-1] for s in scores] == ["1", "2", "3"]

    def test_empty_candidates(self) -> None:
        assert WeightedRanker(clock=fixed_clock).score([], _context()) == []
