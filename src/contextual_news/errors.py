"""Exceptions surfaced to callers of the news services."""


class ContextualNewsError(Exception):
    """Base class for errors raised by contextual_news."""


class ArticleNotFoundError(ContextualNewsError, LookupError):
    """Raised when an operation references an article id that is not stored."""

    def __init__(self, article_id: object) -> None:
        super().__init__(f"Article not found: {article_id}")
        self.article_id = article_id


class InvalidRequestError(ContextualNewsError, ValueError):
    """Raised for a well-formed request that cannot be served."""
