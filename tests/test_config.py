"""Tests for configuration loading and factory functions."""

from pathlib import Path

import pydantic
import pytest
from conftest import fixed_clock, make_article

from contextual_news.config import (
    ClaudeLLMConfig,
    ContextualNewsConfig,
    DisabledLLMConfig,
    OllamaLLMConfig,
    RankingConfig,
    TrendingConfig,
    create_from_config,
    get_default_config_path,
    load_config,
)
from contextual_news.config.factory import create_capabilities, create_ranker, create_trending
from contextual_news.enrichment import ClaudeEnricher, EnrichmentAssembler, OllamaEnricher
from contextual_news.pipeline import NewsQueryService
from contextual_news.query import ClaudeQueryParser, OllamaQueryParser
from contextual_news.run_logger import RunLogger
from contextual_news.store import InMemoryArticleStore, InMemoryTrendStore
from contextual_news.trending import TrendingAggregator


class TestConfigModels:
    """Tests for Pydantic config models."""

    def test_root_defaults(self) -> None:
        config = ContextualNewsConfig()
        assert isinstance(config.llm, DisabledLLMConfig)
        assert config.ranking.relevance_weight == 0.35
        assert config.enrichment.top_n == 5
        assert config.understanding.cache_ttl_seconds == 21600.0
        assert config.trending.half_life_minutes == 360.0
        assert config.data.file_path == "data/news_data.json"
        assert config.logging.enabled is False

    def test_claude_config_defaults(self) -> None:
        config = ClaudeLLMConfig()
        assert config.type == "claude"
        assert config.model == "claude-haiku-4-5-20251001"
        assert config.system_prompt is None

    def test_ollama_config_defaults(self) -> None:
        config = OllamaLLMConfig()
        assert config.type == "ollama"
        assert config.base_url == "http://localhost:11434"

    def test_llm_discriminator(self) -> None:
        config = ContextualNewsConfig.model_validate({"llm": {"type": "ollama", "model": "mistral"}})
        assert isinstance(config.llm, OllamaLLMConfig)
        assert config.llm.model == "mistral"

    def test_unknown_llm_type_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            ContextualNewsConfig.model_validate({"llm": {"type": "gpt"}})

    def test_trending_bounds(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            TrendingConfig(default_radius_km=500)
        with pytest.raises(pydantic.ValidationError):
            TrendingConfig(default_limit=0)

    def test_negative_weight_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            RankingConfig(semantic_weight=-0.1)


class TestConfigLoading:
    """Tests for YAML config loading."""

    def test_load_config(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(
            """
llm:
  type: claude
  model: claude-sonnet-4-5
ranking:
  semantic_weight: 0.5
trending:
  default_limit: 10
logging:
  enabled: true
  log_dir: /tmp/news-logs
"""
        )
        config = load_config(path)
        assert isinstance(config.llm, ClaudeLLMConfig)
        assert config.llm.model == "claude-sonnet-4-5"
        assert config.ranking.semantic_weight == 0.5
        assert config.ranking.relevance_weight == 0.35
        assert config.trending.default_limit == 10
        assert config.logging.log_dir == "/tmp/news-logs"

    def test_empty_file_is_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == ContextualNewsConfig()

    def test_non_mapping_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- llm\n- ranking\n")
        with pytest.raises(ValueError, match="mapping"):
            load_config(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_get_default_config_path(self) -> None:
        path = get_default_config_path()
        assert path.name == "default.yaml"
        assert path.exists()

    def test_load_default_config(self) -> None:
        config = load_config(get_default_config_path())
        assert isinstance(config.llm, DisabledLLMConfig)
        assert config == ContextualNewsConfig()

    @pytest.mark.parametrize(("name", "expected"), [("claude", ClaudeLLMConfig), ("ollama", OllamaLLMConfig)])
    def test_bundled_configs(self, name: str, expected: type) -> None:
        config = load_config(get_default_config_path(name))
        assert isinstance(config.llm, expected)


class TestFactory:
    """Tests for factory functions."""

    def test_capabilities_claude(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CLAUDE_API_KEY", "test-key")
        parser, enricher = create_capabilities(ClaudeLLMConfig())
        assert isinstance(parser, ClaudeQueryParser)
        assert isinstance(enricher, ClaudeEnricher)

    def test_capabilities_ollama(self) -> None:
        parser, enricher = create_capabilities(OllamaLLMConfig())
        assert isinstance(parser, OllamaQueryParser)
        assert isinstance(enricher, OllamaEnricher)

    def test_capabilities_disabled(self) -> None:
        assert create_capabilities(DisabledLLMConfig()) == (None, None)

    def test_capabilities_unknown_type(self) -> None:
        with pytest.raises(ValueError, match="Unknown llm config type"):
            create_capabilities(RankingConfig())  # type: ignore[arg-type]

    def test_create_ranker_weights(self) -> None:
        ranker = create_ranker(RankingConfig(relevance_weight=1.0, recency_half_life_days=3.0))
        assert ranker.weights.relevance == 1.0
        assert ranker.weights.recency_half_life_days == 3.0

    def test_create_trending(self) -> None:
        aggregator = create_trending(
            TrendingConfig(half_life_minutes=60.0),
            InMemoryArticleStore(),
            InMemoryTrendStore(),
            EnrichmentAssembler(),
        )
        assert isinstance(aggregator, TrendingAggregator)
        assert aggregator.decay_lambda == pytest.approx(0.011552453, rel=1e-6)

    def test_create_from_config(self) -> None:
        service, trending, run_logger = create_from_config(ContextualNewsConfig())
        assert isinstance(service, NewsQueryService)
        assert isinstance(trending, TrendingAggregator)
        assert run_logger is None

    def test_create_from_config_with_logging(self, tmp_path: Path) -> None:
        _, _, run_logger = create_from_config(
            ContextualNewsConfig(), log_override=True, log_dir_override=str(tmp_path)
        )
        assert isinstance(run_logger, RunLogger)
        assert run_logger.enabled

    async def test_created_service_answers_queries(self) -> None:
        store = InMemoryArticleStore([make_article("Technology Outlook", categories=("technology",))])
        service, _, _ = create_from_config(ContextualNewsConfig(), articles=store, clock=fixed_clock)

        response = await service.by_category("technology")

        assert [a.title for a in response.articles] == ["Technology Outlook"]
