"""Console output helpers for the CLI."""

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from ..release_version import ReleaseVersion

console = Console()
error_console = Console(stderr=True)

PACKAGE_LOGGER = "tagbump"


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]✗[/red] {escape(message)}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]![/yellow] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {escape(message)}")


def format_transition(previous: ReleaseVersion | None, new: ReleaseVersion) -> str:
    """Format the previous and new version for display."""
    before = str(previous) if previous is not None else "(none)"
    return f"{before} → {new}"


def setup_logging(verbose: bool = False) -> None:
    """Route package logs to stderr through rich.

    Args:
        verbose: Log every executed command at debug level.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = RichHandler(console=error_console, show_time=False, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
