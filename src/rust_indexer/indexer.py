"""Index building over a project's source tree."""

import logging
from fnmatch import fnmatch
from pathlib import Path

from rust_indexer.config import IndexerConfig, load_config
from rust_indexer.errors import ConfigurationError, ParseError, SourceReadError
from rust_indexer.extractor import index_file
from rust_indexer.models import IndexEntry
from rust_indexer.parsers import get_parser_for_file
from rust_indexer.parsers.base import BaseParser

logger = logging.getLogger(__name__)


def should_exclude_path(rel_path: str, patterns: list[str]) -> bool:
    """Check if a path relative to the source directory matches an exclude pattern."""
    return any(fnmatch(rel_path, pattern) for pattern in patterns)


def is_linked(path: Path, root: Path) -> bool:
    """Check if a path, or a directory between it and root, is a symlink."""
    while path != root and path != path.parent:
        if path.is_symlink():
            return True
        path = path.parent
    return False


def discover_source_files(source_root: Path, config: IndexerConfig) -> list[Path]:
    """Discover source files under a directory, recursively.

    Args:
        source_root: Directory to scan
        config: Indexer configuration (extensions and exclude patterns)

    Returns:
        Sorted list of file paths, so that traversal order is stable.
        Symlinked files and files under symlinked directories are skipped.
    """
    extensions = {ext.lower() for ext in config.extensions}
    files = []

    for file_path in source_root.rglob("*"):
        if not file_path.is_file():
            continue

        if is_linked(file_path, source_root):
            logger.debug(f"Skipping symlink {file_path}")
            continue

        if file_path.suffix.lower() not in extensions:
            continue

        rel_path = file_path.relative_to(source_root).as_posix()
        if should_exclude_path(rel_path, config.exclude):
            logger.debug(f"Excluding {rel_path}")
            continue

        files.append(file_path)

    return sorted(files)


def read_source(path: Path) -> str:
    """Read a source file as UTF-8.

    Raises:
        SourceReadError: If the file cannot be read or is not valid UTF-8
    """
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to read {path}: {e}")
        raise SourceReadError(path, str(e)) from e


def build_index(project_root: Path, config: IndexerConfig | None = None) -> list[IndexEntry]:
    """Build the index of every top-level declaration under a project.

    Any read or parse failure aborts the whole run; no partial index is
    returned.

    Args:
        project_root: Project root directory
        config: Indexer configuration. If None, loaded from the project root.

    Returns:
        Entries of all files, in traversal order then source order

    Raises:
        ConfigurationError: If the source directory is missing
        SourceReadError: If a source file cannot be read
        ParseError: If a source file is not syntactically valid
    """
    if config is None:
        config = load_config(project_root)

    source_root = project_root / config.source_dir
    if not source_root.is_dir():
        raise ConfigurationError(f"{source_root} is not a directory")

    parsers: dict[str, BaseParser | None] = {}
    entries: list[IndexEntry] = []

    for file_path in discover_source_files(source_root, config):
        suffix = file_path.suffix.lower()
        if suffix not in parsers:
            parsers[suffix] = get_parser_for_file(file_path)
        parser = parsers[suffix]
        if parser is None:
            raise ConfigurationError(f"No parser available for {suffix} files")

        relative = file_path.relative_to(project_root).as_posix()
        source_code = read_source(file_path)

        try:
            declarations = parser.parse(source_code, relative)
        except ParseError as e:
            logger.error(str(e))
            raise

        file_entries = index_file(declarations, relative)
        logger.debug(f"Indexed {relative}: {len(file_entries)} entries")

        entries.extend(file_entries)

    logger.debug(f"Built index with {len(entries)} entries")
    return entries
