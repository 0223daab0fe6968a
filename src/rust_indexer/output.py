import json
from collections.abc import Sequence
from typing import TextIO

from rust_indexer.errors import OutputError
from rust_indexer.models import IndexEntry


def render_index(entries: Sequence[IndexEntry]) -> str:
    """Render entries as a pretty-printed JSON array."""
    return json.dumps([entry.to_dict() for entry in entries], indent=2, ensure_ascii=False)


def write_index_to(entries: Sequence[IndexEntry], sink: TextIO) -> None:
    """Write entries as a JSON array to a text sink and flush it.

    Raises:
        OutputError: If the sink cannot be written
    """
    text = render_index(entries)
    try:
        sink.write(text)
        sink.write("\n")
        sink.flush()
    except (OSError, ValueError) as e:
        raise OutputError(f"Failed to write index: {e}") from e
