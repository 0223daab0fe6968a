"""Configuration management for rust-indexer."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".rust-indexer.yml"


@dataclass
class IndexerConfig:
    """Configuration for source discovery.

    Attributes:
        source_dir: Directory under the project root holding the sources.
        extensions: File suffixes treated as Rust sources.
        exclude: Glob patterns, relative to the source directory, of files
            to leave out of the index.
    """
    source_dir: str = "src"
    extensions: list[str] = field(default_factory=lambda: [".rs"])
    exclude: list[str] = field(default_factory=list)


def _as_list(value) -> list[str]:
    """Accept a single string where a list of strings is expected."""
    if isinstance(value, str):
        return [value]
    return [str(item) for item in value]


def load_config(project_root: Path | None = None) -> IndexerConfig:
    """Load indexer configuration from .rust-indexer.yml in the project root.

    Args:
        project_root: Path to project root. If None, uses current directory.

    Returns:
        IndexerConfig object with loaded or default values.

    Notes:
        If the file doesn't exist, returns default config. If it can't be
        parsed, logs a warning and returns default config.
        Expected YAML structure:

        ```yaml
        index:
          source_dir: src
          extensions: [".rs"]
          exclude: ["generated/*"]
        ```
    """
    if project_root is None:
        project_root = Path.cwd()

    config_path = project_root / CONFIG_FILE_NAME

    if not config_path.exists():
        return IndexerConfig()

    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            logger.warning(f"Ignoring {config_path}: expected a mapping")
            return IndexerConfig()

        index_config = data.get("index", {})
        if not isinstance(index_config, dict):
            logger.warning(f"Ignoring {config_path}: 'index' must be a mapping")
            return IndexerConfig()

        defaults = IndexerConfig()
        return IndexerConfig(
            source_dir=str(index_config.get("source_dir", defaults.source_dir)),
            extensions=_as_list(index_config.get("extensions", defaults.extensions)),
            exclude=_as_list(index_config.get("exclude", defaults.exclude)),
        )
    except (yaml.YAMLError, OSError, TypeError, ValueError) as e:
        logger.warning(f"Failed to load {config_path} ({e}), using defaults")
        return IndexerConfig()
