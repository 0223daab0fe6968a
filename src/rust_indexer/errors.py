"""Exceptions raised while building or writing an index.

Every error aborts the whole run; nothing is recovered locally.
"""

from pathlib import Path


class IndexerError(Exception):
    """Base class for all indexing failures."""


class ConfigurationError(IndexerError):
    """Raised when the project layout does not match the configuration."""


class SourceReadError(IndexerError):
    """Raised when a source file cannot be read or decoded."""

    def __init__(self, path: Path | str, reason: str):
        self.path = str(path)
        super().__init__(f"Failed to read {self.path}: {reason}")


class ParseError(IndexerError):
    """Raised when a source file is not syntactically valid."""

    def __init__(self, file: str, line: int | None = None, column: int | None = None):
        self.file = file
        self.line = line
        self.column = column
        if line is None:
            message = f"Failed to parse {file}"
        else:
            message = f"Failed to parse {file}: syntax error at line {line}, column {column}"
        super().__init__(message)


class OutputError(IndexerError):
    """Raised when the index cannot be written to its sink."""
