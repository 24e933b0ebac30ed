"""Typer callbacks for CLI."""

import typer

from ramanmix.ui import VERSION, console


def version_callback(value: bool | None) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"[header]ramanmix[/header] [dim]v{VERSION}[/dim]")
        raise typer.Exit
