#!/usr/bin/env python
"""CLI for the contextual news retrieval pipeline."""

import argparse
import asyncio
import logging
import random
import sys
from pathlib import Path
from uuid import UUID

from pydantic import BaseModel, ValidationError, field_validator

from contextual_news.config import create_from_config, get_default_config_path, load_config
from contextual_news.data import (
    ArticleResult,
    EventType,
    Location,
    NewsQueryRequest,
    TrendingEventRequest,
)
from contextual_news.errors import ContextualNewsError
from contextual_news.store import InMemoryArticleStore, bootstrap_store
from contextual_news.trending import TrendingEventSimulator

logger = logging.getLogger(__name__)


class CLIArgs(BaseModel):
    """Validated CLI arguments."""

    command: str
    config: Path
    log: bool = False
    log_dir: str = "logs"
    data: Path | None = None
    as_json: bool = False

    @field_validator("config")
    @classmethod
    def config_must_exist(cls, v: Path) -> Path:
        if not v.exists():
            raise ValueError(f"Config file not found: {v}")
        return v


def _print_articles(articles: list[ArticleResult]) -> None:
    print(f"\nFound {len(articles)} articles:\n")
    for i, article in enumerate(articles, 1):
        logger.info(f"{i}. {article.title}  [{article.match_reason} {article.final_score:.3f}]")
        if article.source_name:
            logger.info(f"   Source: {article.source_name}")
        if article.url:
            logger.info(f"   URL: {article.url}")
        if article.distance_km is not None:
            logger.info(f"   Distance: {article.distance_km:.1f} km")
        if article.enrichment.why_relevant:
            logger.info(f"   Why: {article.enrichment.why_relevant}")


async def run(args: CLIArgs, ns: argparse.Namespace) -> None:
    """Execute one sub-command with the given configuration.

    Args:
        args: Validated CLI arguments.
        ns: Parsed sub-command arguments.
    """
    config = load_config(args.config)
    articles = InMemoryArticleStore()
    service, trending, run_logger = create_from_config(
        config,
        articles=articles,
        log_override=args.log if args.log else None,
        log_dir_override=args.log_dir if args.log_dir != "logs" else None,
    )
    data_path = args.data or Path(config.data.file_path)
    await bootstrap_store(articles, data_path)

    location = None
    if ns.lat is not None and ns.lon is not None:
        location = Location(latitude=ns.lat, longitude=ns.lon)

    if args.command == "query":
        request = NewsQueryRequest(
            query=ns.text,
            user_location=location,
            max_results=ns.limit,
            radius_km=ns.radius,
            score_threshold=ns.score,
        )
        logger.info(f"Running query: {request.query}")
        response = await service.query(request)
        if args.as_json:
            print(response.model_dump_json(indent=2))
            return
        meta = response.metadata
        logger.info(f"Intents: {', '.join(meta.intents)} (fallback: {meta.llm_fallback_used})")
        _print_articles(response.articles)
        if run_logger and run_logger.last_log_path:
            logger.info(f"\nRun log written to: {run_logger.last_log_path}")

    elif args.command == "trending":
        if ns.simulate:
            simulator = TrendingEventSimulator(
                trending, articles, skip_probability=0.0, rng=random.Random(ns.seed)
            )
            recorded = await simulator.run(0, max_ticks=ns.simulate)
            logger.info(f"Simulated {recorded} events")
        response = await trending.get_trending_feed(ns.lat, ns.lon, ns.radius, ns.limit)
        if args.as_json:
            print(response.model_dump_json(indent=2))
            return
        logger.info(f"Bucket {response.metadata.bucket_id} (cache hit: {response.metadata.cache_hit})")
        _print_articles(response.articles)

    elif args.command == "event":
        event = TrendingEventRequest(
            event_type=EventType(ns.type),
            article_id=UUID(ns.article_id),
            user_location=location,
        )
        aggregate = await trending.record_event(event)
        logger.info(
            f"Recorded {event.event_type} on {event.article_id}: bucket {aggregate.bucket}, "
            f"score {aggregate.score:.3f}, events {aggregate.event_count}"
        )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Contextual news retrieval and trending feeds.")
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to YAML config file (default: configs/default.yaml)",
    )
    parser.add_argument(
        "--data",
        type=Path,
        default=None,
        help="JSON article corpus (default: data.file_path from config)",
    )
    parser.add_argument(
        "--log",
        action="store_true",
        default=False,
        help="Enable intermediate pipeline logging to JSON file",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default="logs",
        help="Directory for log files (default: logs/)",
    )
    parser.add_argument("--json", action="store_true", default=False, help="Print the raw JSON response")
    sub = parser.add_subparsers(dest="command", required=True)

    query = sub.add_parser("query", help="Answer a natural-language news query")
    query.add_argument("text", help="Query text")
    query.add_argument("--lat", type=float, default=None, help="User latitude")
    query.add_argument("--lon", type=float, default=None, help="User longitude")
    query.add_argument("--radius", type=float, default=None, help="Search radius in km")
    query.add_argument("--score", type=float, default=None, help="Minimum relevance score (0-1)")
    query.add_argument("--limit", type=int, default=None, help="Maximum number of results")

    trend = sub.add_parser("trending", help="Show trending articles near a location")
    trend.add_argument("--lat", type=float, required=True, help="Latitude")
    trend.add_argument("--lon", type=float, required=True, help="Longitude")
    trend.add_argument("--radius", type=float, default=None, help="Radius in km (1-200)")
    trend.add_argument("--limit", type=int, default=None, help="Number of articles (1-20)")
    trend.add_argument(
        "--simulate",
        type=int,
        default=0,
        metavar="N",
        help="Record N random interaction events before reading the feed",
    )
    trend.add_argument("--seed", type=int, default=None, help="Random seed for --simulate")

    event = sub.add_parser("event", help="Record an interaction with an article")
    event.add_argument("article_id", help="Article UUID")
    event.add_argument("--type", choices=[t.value for t in EventType], default=EventType.VIEW.value)
    event.add_argument("--lat", type=float, default=None, help="Event latitude")
    event.add_argument("--lon", type=float, default=None, help="Event longitude")

    return parser


def main() -> None:
    """Entry point for the CLI."""
    parser = _build_parser()

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    ns = parser.parse_args()
    config_path: Path = ns.config if ns.config else get_default_config_path()

    try:
        args = CLIArgs(
            command=ns.command,
            config=config_path,
            log=ns.log,
            log_dir=ns.log_dir,
            data=ns.data,
            as_json=ns.json,
        )
    except Exception as e:
        logger.error(str(e))
        sys.exit(1)

    try:
        asyncio.run(run(args, ns))
    except (ValidationError, ContextualNewsError, ValueError) as e:
        logger.error(str(e))
        sys.exit(2)
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
