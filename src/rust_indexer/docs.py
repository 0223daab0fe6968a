"""Documentation normalization for indexed declarations."""

from collections.abc import Sequence


def extract_docs(lines: Sequence[str]) -> tuple[str | None, str | None]:
    """Build the summary line and full doc text from raw doc lines.

    Args:
        lines: Raw doc lines in source order, one per doc comment or
            doc attribute.

    Returns:
        Tuple of (doc_summary, doc). doc_summary is the first non-blank
        line, stripped, or None when every line is blank. doc is the lines
        joined with newlines, untouched, or None when there are no lines.
    """
    if not lines:
        return None, None

    doc = "\n".join(lines)
    doc_summary = next((line.strip() for line in lines if line.strip()), None)

    return doc_summary, doc
