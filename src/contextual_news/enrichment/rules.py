"""Template-based enrichment used when no language model is available."""

from contextual_news.data import ArticleEnrichment, EnrichmentRequest, NewsArticle
from contextual_news.query.rules import extract_entities

MAX_SUMMARY_CHARS = 220
MAX_HIGHLIGHTS = 3


def build_summary(article: NewsArticle) -> str | None:
    base = article.description if article.description and article.description.strip() else article.title
    if not base:
        return None
    summary = base[: MAX_SUMMARY_CHARS - 3] + "..." if len(base) > MAX_SUMMARY_CHARS else base
    if article.source_name:
        summary += f" from {article.source_name}"
    return summary


def build_why_relevant(request: EnrichmentRequest, key_entities: list[str]) -> str | None:
    reasons: list[str] = []
    if request.score.match_reason:
        reasons.append(f"Matched by {request.score.match_reason}")
    if (
        request.user_latitude is not None
        and request.user_longitude is not None
        and request.article.has_coordinates
    ):
        reasons.append("Geographically relevant to your location")
    if key_entities:
        reasons.append("Highlights: " + ", ".join(key_entities[:MAX_HIGHLIGHTS]))
    return ". ".join(reasons) if reasons else None


class RuleBasedEnricher:
    """Enrich articles from their own text; never fails."""

    async def enrich(self, request: EnrichmentRequest) -> ArticleEnrichment:
        return self.enrich_sync(request)

    def enrich_sync(self, request: EnrichmentRequest) -> ArticleEnrichment:
        article = request.article
        key_entities = extract_entities(f"{article.title} {article.description or ''}")
        return ArticleEnrichment(
            summary=build_summary(article),
            key_entities=tuple(key_entities),
            why_relevant=build_why_relevant(request, key_entities),
        )
