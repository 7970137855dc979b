"""Tests for the command-line entry point."""

import json
from pathlib import Path

import pytest

from contextual_news.config import get_default_config_path
from main import CLIArgs, _build_parser, run

ARTICLE = {
    "id": "7c2e1d4f-0b3a-4e5f-8a9b-1c2d3e4f5a60",
    "title": "Palo Alto Library Reopens",
    "description": "the downtown branch reopened after renovation.",
    "publication_date": "2025-03-24T09:00:00",
    "source_name": "Palo Alto Online",
    "category": ["general"],
    "relevance_score": 0.6,
    "latitude": 37.4419,
    "longitude": -122.143,
}


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    path = tmp_path / "news.json"
    path.write_text(json.dumps([ARTICLE]))
    return path


def _args(command: str, data_file: Path) -> CLIArgs:
    return CLIArgs(command=command, config=get_default_config_path(), data=data_file, as_json=True)


def test_trending_simulate_option_parses() -> None:
    ns = _build_parser().parse_args(["trending", "--lat", "1", "--lon", "2", "--simulate", "4", "--seed", "9"])
    assert ns.simulate == 4
    assert ns.seed == 9

    ns = _build_parser().parse_args(["trending", "--lat", "1", "--lon", "2"])
    assert ns.simulate == 0
    assert ns.seed is None


async def test_trending_without_simulation_is_empty(data_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    ns = _build_parser().parse_args(["trending", "--lat", "37.4419", "--lon", "-122.143"])

    await run(_args("trending", data_file), ns)

    assert json.loads(capsys.readouterr().out)["articles"] == []


async def test_trending_with_simulated_events(data_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    ns = _build_parser().parse_args(
        ["trending", "--lat", "37.4419", "--lon", "-122.143", "--simulate", "3", "--seed", "5"]
    )

    await run(_args("trending", data_file), ns)

    response = json.loads(capsys.readouterr().out)
    assert response["metadata"]["cache_hit"] is False
    [article] = response["articles"]
    assert article["id"] == ARTICLE["id"]
    assert article["match_reason"] == "trending"
    # Three events weigh at least one each.
    assert article["final_score"] > 2.9


async def test_query_command(data_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    ns = _build_parser().parse_args(["query", "library"])

    await run(_args("query", data_file), ns)

    response = json.loads(capsys.readouterr().out)
    assert [a["title"] for a in response["articles"]] == ["Palo Alto Library Reopens"]
