"""Utility functions for the dashboard CLI."""
import logging
import typing as t
from datetime import date, datetime

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

console = Console()
err_console = Console(stderr=True)

CLASS_STYLES = ["blue", "green", "magenta", "dark_orange", "deep_pink3", "dark_cyan"]


def configure_logging(verbose: bool) -> None:
    """Route log records through rich; INFO with --verbose, WARNING otherwise."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def format_due(iso_date: str, today: t.Optional[date] = None) -> str:
    """Convert an ISO date to 'Mon 1/15', prefixed with a marker when overdue."""
    try:
        due = datetime.fromisoformat(iso_date).date()
    except (ValueError, TypeError):
        return escape(iso_date) if iso_date else "—"
    text = f"{due:%a} {due.month}/{due.day}"
    if today is not None and due < today:
        return f"[red]{text}[/red]"
    return text


def truncate_title(title: str, max_length: int = 40) -> str:
    """Truncate title to max_length characters, adding ellipsis if needed."""
    if len(title) <= max_length:
        return title
    return title[:max_length-3] + "..."


def class_style(index: int) -> str:
    return CLASS_STYLES[index % len(CLASS_STYLES)]
