"""Utility functions for the planner CLI."""
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from paste_parser.text_sources import load_text

console = Console()
err_console = Console(stderr=True)


def configure_logging(level: str) -> None:
    """Route log records through rich on stderr."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def read_source(source: str) -> str:
    """Text of ``source``: ``-`` for stdin, otherwise a file path or URL.

    Args:
        source: What the user passed on the command line.

    Returns:
        The text to parse.
    """
    if source == "-":
        return sys.stdin.read()
    return load_text(source)


def fail(message: str) -> None:
    """Print an error the way every command reports one, then exit with status 1."""
    err_console.print(f"[red]Error:[/red] {escape(message)}")
    raise SystemExit(1)


def truncate(text: str, max_length: int = 45) -> str:
    """Truncate text to max_length characters, adding ellipsis if needed."""
    if len(text) <= max_length:
        return text
    return text[:max_length - 3] + "..."
