"""Main Typer application for ramanmix.

This module provides a thin orchestration layer that creates the main Typer
application and registers the commands from the commands/ subpackage.
"""

from typing import Annotated

import typer

from ramanmix.cli.callbacks import version_callback
from ramanmix.cli.commands import fit_command, init_command

app = typer.Typer(
    name="ramanmix",
    help="ramanmix - Raman mixture decomposition against calibrated reference materials",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """ramanmix - Fit Raman spectra of blends as sums of calibrated materials.

    Recovers one height per material and records it in a results ledger.
    """


app.command(name="fit")(fit_command)
app.command(name="init")(init_command)
