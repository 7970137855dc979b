"""Tests for rule-based enrichment and the enrichment assembler."""

from uuid import UUID

from conftest import make_article

from contextual_news.data import (
    ArticleEnrichment,
    ArticleScore,
    EnrichmentRequest,
    NewsArticle,
)
from contextual_news.enrichment import EnrichmentAssembler, RuleBasedEnricher
from contextual_news.enrichment.rules import MAX_SUMMARY_CHARS, build_summary


def _score(article: NewsArticle, final: float = 0.5, reason: str = "search") -> ArticleScore:
    return ArticleScore(article=article, final_score=final, distance_km=None, match_reason=reason)


class StubEnricher:
    def __init__(self, result: ArticleEnrichment | None = None, error: Exception | None = None) -> None:
        self.result = result or ArticleEnrichment()
        self.error = error
        self.seen: list[UUID] = []

    async def enrich(self, request: EnrichmentRequest) -> ArticleEnrichment:
        self.seen.append(request.article.id)
        if self.error is not None:
            raise self.error
        return self.result


class TestRuleBasedEnricher:
    def test_summary_from_description_with_source(self) -> None:
        article = make_article("Title", description="Short description.", source_name="BBC")
        assert build_summary(article) == "Short description. from BBC"

    def test_summary_falls_back_to_title(self) -> None:
        assert build_summary(make_article("Only A Title", description="  ")) == "Only A Title"

    def test_long_summary_is_truncated(self) -> None:
        article = make_article("T", description="x" * 500, source_name="Reuters")
        summary = build_summary(article)
        assert summary is not None
        assert summary == "x" * (MAX_SUMMARY_CHARS - 3) + "..." + " from Reuters"

    def test_summary_at_limit_is_kept(self) -> None:
        article = make_article("T", description="y" * MAX_SUMMARY_CHARS)
        assert build_summary(article) == "y" * MAX_SUMMARY_CHARS

    def test_why_relevant_and_entities(self) -> None:
        article = make_article(
            "Apple Meets Samsung Officials",
            description="talks held in Seoul with Tim Cook and Lee Jae",
            latitude=37.5,
            longitude=127.0,
        )
        request = EnrichmentRequest(article, "chips", 37.4, 126.9, _score(article, reason="nearby"))

        enrichment = RuleBasedEnricher().enrich_sync(request)

        assert enrichment.key_entities == ("Apple Meets Samsung Officials", "Seoul", "Tim Cook", "Lee Jae")
        assert enrichment.why_relevant == (
            "Matched by nearby. Geographically relevant to your location. "
            "Highlights: Apple Meets Samsung Officials, Seoul, Tim Cook"
        )

    def test_why_relevant_without_location(self) -> None:
        article = make_article("quiet headline", latitude=1.0, longitude=1.0)
        request = EnrichmentRequest(article, None, None, None, _score(article, reason="category"))
        assert RuleBasedEnricher().enrich_sync(request).why_relevant == "Matched by category"


class TestEnrichmentAssembler:
    async def test_only_top_n_enriched(self) -> None:
        articles = [make_article(f"Story {i}", description=f"Body {i}") for i in range(4)]
        scores = [_score(a, final=1.0 - i / 10) for i, a in enumerate(articles)]
        assembler = EnrichmentAssembler(top_n=2)

        results = await assembler.assemble(scores, "story", None, None)

        assert [r.id for r in results] == [a.id for a in articles]
        assert results[0].enrichment.summary == "Body 0"
        assert results[1].enrichment.summary == "Body 1"
        assert results[2].enrichment.summary is None
        assert results[3].enrichment.key_entities == []

    async def test_capability_answer_completed_from_rules(self) -> None:
        article = make_article("Apple Roadmap", description="custom silicon.", source_name="Reuters")
        stub = StubEnricher(ArticleEnrichment(summary="Model summary."))
        assembler = EnrichmentAssembler(stub)

        [result] = await assembler.assemble([_score(article)], "apple", None, None)

        assert result.enrichment.summary == "Model summary."
        assert result.enrichment.key_entities == ["Apple Roadmap"]
        assert result.enrichment.why_relevant == "Matched by search. Highlights: Apple Roadmap"

    async def test_capability_failure_uses_rules(self) -> None:
        article = make_article("Apple Roadmap", description="custom silicon.", source_name="Reuters")
        assembler = EnrichmentAssembler(StubEnricher(error=TimeoutError("slow")))

        [result] = await assembler.assemble([_score(article)], "apple", None, None)

        assert result.enrichment.summary == "custom silicon. from Reuters"

    async def test_capability_answers_are_cached(self) -> None:
        article = make_article("Cached")
        stub = StubEnricher(ArticleEnrichment(summary="From model"))
        assembler = EnrichmentAssembler(stub)

        await assembler.enrich_top([_score(article)], "q", None, None)
        await assembler.enrich_top([_score(article)], "q", None, None)
        assert len(stub.seen) == 1

        await assembler.enrich_top([_score(article)], "other", None, None)
        assert len(stub.seen) == 2

        assembler.clear_cache()
        await assembler.enrich_top([_score(article)], "q", None, None)
        assert len(stub.seen) == 3

    async def test_failures_are_not_cached(self) -> None:
        stub = StubEnricher(error=RuntimeError("down"))
        assembler = EnrichmentAssembler(stub)
        article = make_article("Flaky")
        await assembler.enrich_top([_score(article)], "q", None, None)
        await assembler.enrich_top([_score(article)], "q", None, None)
        assert len(stub.seen) == 2

    def test_to_article_result_projection(self) -> None:
        article = make_article(
            "Projected",
            source_name="BBC",
            relevance_score=0.4,
            categories=("world", "business"),
        )
        score = ArticleScore(article=article, final_score=0.61, distance_km=12.5, match_reason="category")

        result = EnrichmentAssembler.to_article_result(score, None)

        assert result.id == article.id
        assert result.categories == ["business", "world"]
        assert result.final_score == 0.61
        assert result.distance_km == 12.5
        assert result.match_reason == "category"
        assert result.enrichment.summary is None
