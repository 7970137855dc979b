"""Pydantic configuration models for contextual_news components."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from contextual_news.llm import DEFAULT_CLAUDE_MODEL, DEFAULT_OLLAMA_BASE_URL, DEFAULT_OLLAMA_MODEL

# ============================================================
# Language Model Configs
# ============================================================


class ClaudeLLMConfig(BaseModel):
    """Claude-backed query parsing and enrichment (key from CLAUDE_API_KEY)."""

    type: Literal["claude"] = "claude"
    model: str = DEFAULT_CLAUDE_MODEL
    request_timeout_seconds: float = Field(default=10.0, gt=0)
    system_prompt: str | None = None

    model_config = {"frozen": True}


class OllamaLLMConfig(BaseModel):
    """Ollama-backed query parsing and enrichment."""

    type: Literal["ollama"] = "ollama"
    model: str = DEFAULT_OLLAMA_MODEL
    base_url: str = DEFAULT_OLLAMA_BASE_URL
    request_timeout_seconds: float = Field(default=10.0, gt=0)

    model_config = {"frozen": True}


class DisabledLLMConfig(BaseModel):
    """No language model; rule-based parsing and enrichment only."""

    type: Literal["disabled"] = "disabled"

    model_config = {"frozen": True}


LLMConfig = Annotated[
    ClaudeLLMConfig | OllamaLLMConfig | DisabledLLMConfig,
    Field(discriminator="type"),
]


# ============================================================
# Stage Configs
# ============================================================


class RankingConfig(BaseModel):
    """Weights of the four ranking contributions."""

    relevance_weight: float = Field(default=0.35, ge=0)
    recency_weight: float = Field(default=0.25, ge=0)
    semantic_weight: float = Field(default=0.30, ge=0)
    proximity_weight: float = Field(default=0.10, ge=0)
    recency_half_life_days: float = Field(default=7.0, gt=0)

    model_config = {"frozen": True}


class EnrichmentConfig(BaseModel):
    top_n: int = Field(default=5, ge=0)
    cache_ttl_seconds: float = Field(default=900.0, gt=0)
    cache_max_size: int = Field(default=5000, gt=0)

    model_config = {"frozen": True}


class UnderstandingConfig(BaseModel):
    cache_ttl_seconds: float = Field(default=21600.0, gt=0)
    cache_max_size: int = Field(default=1000, gt=0)

    model_config = {"frozen": True}


class TrendingConfig(BaseModel):
    """Trending feed bucketing, decay and cache settings."""

    bucket_size_degrees: float = Field(default=0.5, gt=0)
    half_life_minutes: float = Field(default=360.0, gt=0)
    default_radius_km: float = Field(default=25.0, ge=1.0, le=200.0)
    default_limit: int = Field(default=5, ge=1, le=20)
    cache_ttl_seconds: float = Field(default=60.0, gt=0)
    cache_max_size: int = Field(default=2000, gt=0)

    model_config = {"frozen": True}


class DataConfig(BaseModel):
    """Location of the JSON article corpus loaded at startup."""

    file_path: str = "data/news_data.json"

    model_config = {"frozen": True}


# ============================================================
# Logging Config
# ============================================================


class LoggingConfig(BaseModel):
    """Configuration for intermediate pipeline logging."""

    enabled: bool = False
    log_dir: str = "logs"

    model_config = {"frozen": True}


# ============================================================
# Root Config
# ============================================================


class ContextualNewsConfig(BaseModel):
    """Root configuration for contextual_news."""

    llm: ClaudeLLMConfig | OllamaLLMConfig | DisabledLLMConfig = Field(
        default_factory=DisabledLLMConfig, discriminator="type"
    )
    ranking: RankingConfig = Field(default_factory=RankingConfig)
    enrichment: EnrichmentConfig = Field(default_factory=EnrichmentConfig)
    understanding: UnderstandingConfig = Field(default_factory=UnderstandingConfig)
    trending: TrendingConfig = Field(default_factory=TrendingConfig)
    data: DataConfig = Field(default_factory=DataConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}
