from rust_indexer.models import Location


def line_range(span: Location) -> tuple[int, int]:
    """Return the 1-based inclusive (line_start, line_end) of a span."""
    return span.start, span.end
