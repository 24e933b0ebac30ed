"""UI tables for displaying structured data.

This module provides functions for creating and displaying Rich tables
with consistent styling across the application.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich import box
from rich.markup import escape
from rich.table import Table

from .console import console, icon

if TYPE_CHECKING:
    from ramanmix.services.batch.runner import BatchSummary

__all__ = [
    "create_table",
    "print_batch_table",
    "print_summary",
]

_STATUS_STYLES = {
    "recorded": ("success", "check"),
    "skipped": ("neutral", "skip"),
    "failed": ("error", "error"),
}


def create_table(title: str | None = None, show_header: bool = True) -> Table:
    """Create a standard table with consistent styling.

    Args:
        title: Optional table title
        show_header: Whether to show table header

    Returns
    -------
        Configured Table instance
    """
    return Table(
        title=title,
        title_style="header" if title else None,
        box=box.ROUNDED,
        show_header=show_header,
        header_style="bold cyan",
        border_style="dim",
    )


def print_summary(items: dict[str, Any], title: str = "Summary") -> None:
    """Print a standard two-column summary table.

    Args:
        items: Dictionary of key-value pairs to display
        title: Table title
    """
    table = create_table(title, show_header=False)
    table.add_column("Item", style="metric")
    table.add_column("Value", style="value")

    for key, value in items.items():
        table.add_row(key, str(value))

    console.print(table)


def print_batch_table(summary: BatchSummary, materials: list[str]) -> None:
    """Print one row per processed sample with its status and heights.

    Args:
        summary: Outcome of a batch run
        materials: Material names in ledger column order
    """
    table = create_table("Batch results")
    table.add_column("Sample", style="key")
    table.add_column("Status", justify="center")
    for material in materials:
        table.add_column(material, justify="right", style="value")
    table.add_column("Note", style="dim")

    for outcome in summary.outcomes:
        style, glyph = _STATUS_STYLES[outcome.status.value]
        status = f"[{style}]{icon(glyph)} {outcome.status.value}[/{style}]"
        heights = [
            f"{outcome.heights[material]:.6g}" if material in outcome.heights else "-"
            for material in materials
        ]
        note = outcome.message
        if outcome.status.value == "recorded" and not outcome.converged:
            note = "did not converge"
        table.add_row(escape(outcome.name), status, *heights, escape(note))

    console.print(table)
