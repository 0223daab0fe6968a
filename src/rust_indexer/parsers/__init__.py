from pathlib import Path

from rust_indexer.parsers.base import BaseParser
from rust_indexer.parsers.rust_parser import RustParser

PARSERS: dict[str, type[BaseParser]] = {
    ".rs": RustParser,
}


def get_parser_for_file(path: Path) -> BaseParser | None:
    """Return a parser for the file's extension, or None if unsupported."""
    parser_class = PARSERS.get(path.suffix.lower())
    if parser_class is None:
        return None
    return parser_class()
