from abc import ABC, abstractmethod

from rust_indexer.models import Declaration


class BaseParser(ABC):
    """Abstract base class for language-specific declaration parsers."""

    @abstractmethod
    def parse(self, source_code: str, file_path: str) -> list[Declaration]:
        """Parse source code into its top-level declarations.

        Args:
            source_code: The source code to parse
            file_path: Relative path to the file (for error reporting)

        Returns:
            List of Declaration objects in source order

        Raises:
            ParseError: If the source code is not syntactically valid
        """
        pass
