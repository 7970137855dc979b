"""Article predicates and ordering shared by every store implementation."""

from dataclasses import dataclass
from datetime import datetime

from contextual_news.data import NewsArticle
from contextual_news.geo import BoundingBox

SEARCH_STOP_WORDS: frozenset[str] = frozenset(
    {"news", "latest", "today", "top", "breaking", "update", "updates", "near", "about", "around"}
)

# Leading "-" means descending.
DEFAULT_ORDER: tuple[str, ...] = ("-relevance_score", "-publication_date")


def matches_search_term(article: NewsArticle, term: str | None) -> bool:
    """Phrase match on title/description, or every significant token matches.

    Tokens shorter than three characters and stop words are ignored. A
    term with no significant tokens falls back to the phrase match alone.
    """
    if term is None or not term.strip():
        return True
    normalized = term.lower().strip()
    title = article.title.lower()
    description = (article.description or "").lower()

    if normalized in title or normalized in description:
        return True

    tokens = [
        token for token in normalized.split() if len(token) >= 3 and token not in SEARCH_STOP_WORDS
    ]
    if not tokens:
        return False
    return all(token in title or token in description for token in tokens)


@dataclass(frozen=True)
class ArticleFilter:
    """Conjunction of optional article predicates.

    Unset fields do not constrain. ``search_terms`` holds one or more terms
    that must all match (see :func:`matches_search_term`).
    """

    category: str | None = None
    source: str | None = None
    min_score: float | None = None
    published_after: datetime | None = None
    published_before: datetime | None = None
    bounding_box: BoundingBox | None = None
    search_terms: tuple[str, ...] = ()

    def matches(self, article: NewsArticle) -> bool:
        if self.category and self.category.lower() not in {c.lower() for c in article.categories}:
            return False
        if self.source and (article.source_name or "").lower() != self.source.lower():
            return False
        if self.min_score is not None and (
            article.relevance_score is None or article.relevance_score < self.min_score
        ):
            return False
        if self.published_after is not None and (
            article.publication_date is None or article.publication_date < self.published_after
        ):
            return False
        if self.published_before is not None and (
            article.publication_date is None or article.publication_date > self.published_before
        ):
            return False
        if self.bounding_box is not None:
            if not article.has_coordinates:
                return False
            if not self.bounding_box.contains(article.latitude, article.longitude):  # type: ignore[arg-type]
                return False
        return all(matches_search_term(article, term) for term in self.search_terms)


def sort_articles(articles: list[NewsArticle], order_by: tuple[str, ...] = DEFAULT_ORDER) -> list[NewsArticle]:
    """Sort by each field in turn; absent values always sort last."""
    result = list(articles)
    # Stable sorts applied from the least to the most significant key.
    for key in reversed(order_by):
        descending = key.startswith("-")
        name = key.lstrip("-")
        present = [a for a in result if getattr(a, name) is not None]
        absent = [a for a in result if getattr(a, name) is None]
        present.sort(key=lambda a: getattr(a, name), reverse=descending)
        result = present + absent
    return result
