"""Query pipeline composition."""

from contextual_news.pipeline.service import NewsQueryService, build_metadata, merge_request_filters

__all__ = ["NewsQueryService", "build_metadata", "merge_request_filters"]
