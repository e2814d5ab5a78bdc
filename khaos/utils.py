"""Shared utility functions for the Khaos layer analyzer.

Provides the process-wide Rich console and the small set of message and
table helpers every analyzer uses to report warnings and summaries.  Nothing
in here touches the filesystem or the network.
"""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console(stderr=True)

# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_confidence(confidence: float) -> str:
    """Format a 0-1 confidence value as a percentage string.

    Examples::

        format_confidence(1.0)    -> "100%"
        format_confidence(0.773)  -> "77%"
        format_confidence(-0.2)   -> "0%"
    """
    clamped = max(0.0, min(1.0, confidence))
    return f"{clamped * 100:.0f}%"


def format_score(score: float) -> str:
    """Format a raw layer score with at most one decimal place."""
    if float(score).is_integer():
        return str(int(score))
    return f"{score:.1f}"


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, Any], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")
