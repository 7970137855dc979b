"""YAML configuration loading utilities."""

from pathlib import Path

import yaml

from contextual_news.config.models import ContextualNewsConfig

CONFIG_DIR = Path(__file__).parents[3] / "configs"


def load_config(path: Path | str) -> ContextualNewsConfig:
    """Load and validate a YAML config; an empty file yields the defaults.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the document is not a mapping.
        pydantic.ValidationError: If a section is invalid.
    """
    path = Path(path)
    raw = yaml.safe_load(path.read_text())
    if raw is None:
        return ContextualNewsConfig()
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a mapping at the top level, got {type(raw).__name__}")
    return ContextualNewsConfig.model_validate(raw)


def get_default_config_path(name: str = "default") -> Path:
    """Path of a bundled config, e.g. ``"claude"`` for configs/claude.yaml."""
    return CONFIG_DIR / f"{name}.yaml"
