import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from rust_indexer import __version__
from rust_indexer.errors import IndexerError, OutputError
from rust_indexer.indexer import build_index
from rust_indexer.output import write_index_to

app = typer.Typer(
    help="rust-indexer - structural index of Rust source trees",
    context_settings={"help_option_names": ["-h", "--help"]},
    add_completion=False,
)

console = Console()


def _version_callback(value: bool):
    """Show version and exit."""
    if value:
        console.print(f"rust-indexer version {__version__}")
        raise typer.Exit()


@app.command()
def index(
    project_root: Optional[Path] = typer.Argument(
        None,
        help="Project root containing a src/ directory (defaults to the current directory)",
        show_default=False,
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the index to this file instead of stdout",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log progress to stderr"),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """Build a JSON search index from Rust sources in the src/ directory.

    If PROJECT_ROOT is omitted, the current working directory is used.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s - %(message)s")

    if project_root is None:
        project_root = Path.cwd()

    try:
        entries = build_index(project_root)

        if output is None:
            write_index_to(entries, sys.stdout)
        else:
            try:
                with open(output, "w", encoding="utf-8") as sink:
                    write_index_to(entries, sink)
            except OSError as e:
                raise OutputError(f"Failed to write index to {output}: {e}") from e

    except IndexerError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
