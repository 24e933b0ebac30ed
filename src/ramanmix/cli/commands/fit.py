"""Fit command implementation."""

from __future__ import annotations

import pathlib  # noqa: TC003
from typing import Annotated

import typer

from ramanmix.core.domain.config import RamanMixConfig
from ramanmix.core.shared.exceptions import RamanMixError
from ramanmix.io.config import load_config


def fit_command(
    files: Annotated[
        list[pathlib.Path],
        typer.Argument(
            help="Spectrum files (two columns: wavenumber intensity)",
            dir_okay=False,
        ),
    ],
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress progress display and non-error output",
        ),
    ] = False,
    delete: Annotated[
        bool,
        typer.Option(
            "--delete",
            "-d",
            help="Delete all ledger records (after confirmation) before fitting",
        ),
    ] = False,
    config: Annotated[
        pathlib.Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to TOML configuration file",
            exists=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ] = None,
    basis: Annotated[
        pathlib.Path | None,
        typer.Option(
            "--basis",
            "-b",
            help="Component basis file (TOML/JSON); overrides the configuration",
            dir_okay=False,
        ),
    ] = None,
    ledger: Annotated[
        pathlib.Path | None,
        typer.Option(
            "--ledger",
            "-l",
            help="Ledger file; overrides the configuration",
            dir_okay=False,
        ),
    ] = None,
    output: Annotated[
        pathlib.Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output directory for per-sample results",
            file_okay=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            help="Echo log records to the console",
        ),
    ] = False,
) -> None:
    """Fit each spectrum as a blend of calibrated materials plus a baseline.

    Samples already present in the ledger are skipped. Failures are reported
    per sample and do not stop the batch.

    Examples
    --------
    Fit all spectra in the current directory:
        $ ramanmix fit *.txt

    Start over with an empty ledger:
        $ ramanmix fit --delete *.txt

    Using a configuration file:
        $ ramanmix fit *.txt --config ramanmix.toml
    """
    from ramanmix.services.batch.pipeline import BatchPipeline
    from ramanmix.ui.messages import info, show_error_with_details

    try:
        fit_config = load_config(config) if config is not None else RamanMixConfig()
    except RamanMixError as e:
        show_error_with_details("Loading configuration", e)
        raise typer.Exit(code=1) from e

    # Override with CLI options only where explicitly set
    if basis is not None:
        fit_config.basis = basis
    if ledger is not None:
        fit_config.output.ledger = ledger
    if output is not None:
        fit_config.output.directory = output

    reset_ledger = False
    if delete:
        reset_ledger = typer.confirm("Really delete all records?", default=False)
        if not reset_ledger:
            info("Records saved!")

    try:
        BatchPipeline.run(
            files,
            fit_config,
            reset_ledger=reset_ledger,
            quiet=quiet,
            verbose=verbose,
        )
    except RamanMixError as e:
        show_error_with_details("Batch fitting", e)
        raise typer.Exit(code=1) from e
