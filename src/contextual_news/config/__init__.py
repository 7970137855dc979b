"""Configuration module for contextual_news."""

from contextual_news.config.factory import create_from_config
from contextual_news.config.loader import get_default_config_path, load_config
from contextual_news.config.models import (
    ClaudeLLMConfig,
    ContextualNewsConfig,
    DataConfig,
    DisabledLLMConfig,
    EnrichmentConfig,
    LLMConfig,
    LoggingConfig,
    OllamaLLMConfig,
    RankingConfig,
    TrendingConfig,
    UnderstandingConfig,
)

__all__ = [
    "ClaudeLLMConfig",
    "ContextualNewsConfig",
    "DataConfig",
    "DisabledLLMConfig",
    "EnrichmentConfig",
    "LLMConfig",
    "LoggingConfig",
    "OllamaLLMConfig",
    "RankingConfig",
    "TrendingConfig",
    "UnderstandingConfig",
    "create_from_config",
    "get_default_config_path",
    "load_config",
]
