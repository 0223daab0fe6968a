"""rust-indexer - structural index of Rust source trees."""

import logging

try:
    from importlib.metadata import version

    __version__ = version("rust-indexer")
except Exception:
    __version__ = "0.0.0.dev0+local"  # Fallback for development

logging.getLogger(__name__).addHandler(logging.NullHandler())
