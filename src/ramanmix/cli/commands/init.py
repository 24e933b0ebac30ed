"""Init command implementation."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ramanmix.io.config import generate_default_config
from ramanmix.ui import bullet, error, info, success


def init_command(
    path: Annotated[
        Path,
        typer.Argument(
            help="Path for new configuration file",
            dir_okay=False,
            resolve_path=True,
        ),
    ] = Path("ramanmix.toml"),
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite existing file",
        ),
    ] = False,
) -> None:
    """Generate a default configuration file.

    Creates a TOML configuration file with default settings that can be customized.

    Examples
    --------
      Create default config:
        $ ramanmix init

      Overwrite existing config:
        $ ramanmix init --force
    """
    if path.exists() and not force:
        error(f"File already exists: [path]{path}[/path]")
        info("Use [bold]--force[/bold] to overwrite")
        raise typer.Exit(1)

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(generate_default_config(), encoding="utf-8")
    success(f"Created configuration file: [path]{path}[/path]")
    bullet("Fitting window, iteration cap and tolerance")
    bullet("Background mode and estimation windows")
    bullet("Ledger and output locations")
    info(f"Run fitting: ramanmix fit *.txt --config {path.name}")
