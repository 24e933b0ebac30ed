"""Batch pipeline coordinating CLI input with the batch runner."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from ramanmix.core.domain.basis import default_basis, load_basis
from ramanmix.io.ledger import LedgerRepository
from ramanmix.services.batch.runner import BatchRunner
from ramanmix.ui import (
    Verbosity,
    batch_progress,
    close_logging,
    log_dict,
    log_section,
    print_batch_table,
    print_summary,
    set_verbosity,
    setup_logging,
    show_footer,
    show_header,
    success,
)
from ramanmix.ui.reporter import ConsoleReporter

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from ramanmix.core.domain.basis import BasisSet
    from ramanmix.core.domain.config import RamanMixConfig
    from ramanmix.core.shared.reporter import Reporter
    from ramanmix.services.batch.runner import BatchSummary


def load_config_basis(config: RamanMixConfig) -> BasisSet:
    """Load the configured basis, or the packaged one when none is set.

    Raises
    ------
        BasisConfigError: If the basis file is missing or invalid
    """
    if config.basis is None:
        return default_basis()
    return load_basis(config.basis)


class BatchPipeline:
    """High-level orchestrator for running a batch of mixture fits."""

    @staticmethod
    def run(
        files: Sequence[Path],
        config: RamanMixConfig,
        *,
        reset_ledger: bool = False,
        quiet: bool = False,
        verbose: bool = False,
        reporter: Reporter | None = None,
    ) -> BatchSummary:
        """Run the complete batch using provided inputs and config.

        Args:
            files: Spectrum files, processed in order
            config: RamanMixConfig instance
            reset_ledger: Clear the ledger before fitting (caller confirms)
            quiet: Suppress progress display and non-error messages
            verbose: Echo log records to the console
            reporter: Optional reporter (default: console)

        Returns
        -------
            Summary of all sample outcomes

        Raises
        ------
            BasisConfigError: If the basis cannot be loaded
            LedgerIOError: If the ledger cannot be read, reset or appended to
        """
        reporter = reporter or ConsoleReporter()
        start_time = datetime.now()

        set_verbosity(
            Verbosity.QUIET if quiet else Verbosity.VERBOSE if verbose else Verbosity.NORMAL
        )
        setup_logging(log_file=config.output.log_file, verbose=verbose)
        try:
            return BatchPipeline._run(files, config, reset_ledger, quiet, reporter, start_time)
        finally:
            close_logging()

    @staticmethod
    def _run(
        files: Sequence[Path],
        config: RamanMixConfig,
        reset_ledger: bool,
        quiet: bool,
        reporter: Reporter,
        start_time: datetime,
    ) -> BatchSummary:
        basis = load_config_basis(config)
        ledger = LedgerRepository(config.output.ledger, basis.names)

        log_section("Configuration")
        log_dict(
            {
                "Basis": str(config.basis) if config.basis else "packaged (pvc_blend)",
                "Materials": ", ".join(basis.names),
                "Window": f"{config.fitting.window[0]:g}-{config.fitting.window[1]:g} cm-1",
                "Background": config.background.mode,
                "Method": config.fitting.method,
                "Tolerance": f"{config.fitting.tolerance:.0e}",
                "Ledger": str(config.output.ledger),
                "Output": str(config.output.directory),
            }
        )

        if reset_ledger:
            ledger.reset()
            success("Records deleted!")

        show_header(f"Fitting {len(files)} sample(s)")
        runner = BatchRunner(basis, config, ledger, reporter=reporter)

        if quiet or config.output.headless:
            summary = runner.run(files)
        else:
            with batch_progress(len(files)) as on_sample:
                summary = runner.run(files, on_sample=on_sample)

        if summary.outcomes:
            print_batch_table(summary, basis.names)
        print_summary(
            {
                **{status.capitalize(): count for status, count in summary.counts().items()},
                "Not converged": len(summary.unconverged),
                "Ledger": config.output.ledger,
            }
        )
        log_dict(summary.counts())
        show_footer(start_time, datetime.now())
        return summary


__all__ = ["BatchPipeline", "load_config_basis"]
