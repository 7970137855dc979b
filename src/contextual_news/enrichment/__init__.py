"""Explanations and summaries for top-ranked articles."""

from contextual_news.enrichment.assembler import EnrichmentAssembler
from contextual_news.enrichment.base import Enricher
from contextual_news.enrichment.claude import ClaudeEnricher
from contextual_news.enrichment.ollama import OllamaEnricher
from contextual_news.enrichment.rules import RuleBasedEnricher
from contextual_news.enrichment.schema import enrichment_from_payload

__all__ = [
    "ClaudeEnricher",
    "Enricher",
    "EnrichmentAssembler",
    "OllamaEnricher",
    "RuleBasedEnricher",
    "enrichment_from_payload",
]
