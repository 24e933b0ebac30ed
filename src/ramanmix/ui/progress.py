"""Progress display for batch runs."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING

from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)

from .console import console, icon

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from ramanmix.services.batch.runner import SampleOutcome

__all__ = [
    "batch_progress",
]


@contextmanager
def batch_progress(
    total: int, transient: bool = True
) -> Iterator[Callable[[SampleOutcome], None]]:
    """Show a progress bar over ``total`` samples.

    Yields the callback to pass as ``on_sample`` to the batch runner; each call
    advances the bar and shows the last sample with its status.
    """
    progress = Progress(
        SpinnerColumn(finished_text=f"[success]{icon('check')}[/success]", spinner_name="dots"),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(complete_style="cyan", finished_style="green"),
        MofNCompleteColumn(),
        TextColumn("[dim]•[/dim]"),
        TimeElapsedColumn(),
        TextColumn("[dim]{task.fields[last]}[/dim]"),
        console=console,
        transient=transient,
    )
    with progress:
        task = progress.add_task("Fitting samples", total=total, last="")

        def advance(outcome: SampleOutcome) -> None:
            progress.update(task, advance=1, last=f"{outcome.name}: {outcome.status.value}")

        yield advance
