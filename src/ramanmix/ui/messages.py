"""UI messages and status indicators."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .console import console, icon
from .logging import log, log_section

if TYPE_CHECKING:
    from datetime import datetime

__all__ = [
    "action",
    "bullet",
    "error",
    "info",
    "show_error_with_details",
    "show_footer",
    "show_header",
    "success",
    "warning",
]


def show_header(text: str, do_log: bool = True) -> None:
    """Display a prominent section header."""
    rule = icon("separator") * 60
    console.print(f"[header]{rule}[/header]")
    console.print(f"[header]  {text}[/header]")
    console.print(f"[header]{rule}[/header]")
    if do_log:
        log_section(text)


def success(message: str, indent: int = 0, do_log: bool = True) -> None:
    """Display a success message."""
    spaces = "  " * indent
    console.print(f"{spaces}[success]{icon('check')}[/success] {message}")
    if do_log:
        log(message)


def warning(message: str, indent: int = 0, do_log: bool = True) -> None:
    """Display a warning message."""
    spaces = "  " * indent
    console.print(f"{spaces}[warning]{icon('warn')}[/warning]  {message}")
    if do_log:
        log(message, level="warning")


def error(message: str, indent: int = 0, do_log: bool = True) -> None:
    """Display an error message.

    Errors are printed even in quiet mode.
    """
    spaces = "  " * indent
    quiet = console.quiet
    console.quiet = False
    try:
        console.print(f"{spaces}[error]{icon('error')}[/error] {message}")
    finally:
        console.quiet = quiet
    if do_log:
        log(message, level="error")


def info(message: str, indent: int = 0, do_log: bool = True) -> None:
    """Display an info message."""
    spaces = "  " * indent
    console.print(f"{spaces}[dim]{icon('info')}[/dim] {message}")
    if do_log:
        log(message)


def action(message: str, do_log: bool = True) -> None:
    """Display an action/process message with visual separation."""
    console.print(f"\n[bold yellow]{icon('bullet')}[/bold yellow] {message}")
    if do_log:
        log(message, level="debug")


def bullet(message: str, indent: int = 1, style: str = "default") -> None:
    """Display a bullet point item."""
    spaces = "  " * indent
    marker = style if style in {"success", "warning", "error"} else "info"
    console.print(f"{spaces}[{marker}]{icon('bullet')}[/{marker}] {message}")


def show_footer(start_time: datetime, end_time: datetime) -> None:
    """Show completion footer with timing information."""
    runtime = (end_time - start_time).total_seconds()

    if runtime < 60:
        runtime_str = f"{runtime:.1f}s"
    else:
        minutes = int(runtime // 60)
        seconds = int(runtime % 60)
        runtime_str = f"{minutes}m {seconds}s"

    console.print("\n" + icon("separator") * 60)
    console.print(
        f"[success]{icon('check')}[/success] [dim]Completed:[/dim] "
        f"{end_time.strftime('%Y-%m-%d %H:%M:%S')} | "
        f"[dim]Total runtime:[/dim] [info]{runtime_str}[/info]"
    )
    log(f"Total runtime: {runtime_str}")


def show_error_with_details(context: str, err: Exception, suggestion: str | None = None) -> None:
    """Display an error with its type and an optional suggestion."""
    error(f"{context} failed: [error]{type(err).__name__}[/error]: {err!s}", do_log=False)
    log(f"{context} failed: {type(err).__name__}: {err!s}", level="error")
    if suggestion:
        info(f"Suggestion: {suggestion}")
