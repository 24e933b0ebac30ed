"""Sequential batch fitting with idempotent ledger bookkeeping.

Each sample goes through::

    load -> check ledger -> estimate background -> initial heights
         -> fit -> write artifacts -> append ledger row

Samples already in the ledger are skipped. Per-sample failures are reported
and leave the ledger untouched; a ledger failure aborts the run.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from ramanmix.core.domain.background import estimate_background
from ramanmix.core.domain.spectrum import SpectrumTable, sample_name
from ramanmix.core.fitting.model import MixtureModel
from ramanmix.core.fitting.optimizer import fit_mixture
from ramanmix.core.shared.exceptions import (
    BackgroundWindowError,
    ConvergenceWarning,
    DataIOError,
    InputFormatError,
    LedgerIOError,
    NumericsError,
    OptimizationError,
)
from ramanmix.core.shared.reporter import NullReporter
from ramanmix.io.ledger import valid_identifier
from ramanmix.io.output import write_sample_outputs

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from pathlib import Path

    from ramanmix.core.domain.basis import BasisSet
    from ramanmix.core.domain.config import RamanMixConfig
    from ramanmix.core.fitting.results import FitResult
    from ramanmix.core.shared.reporter import Reporter
    from ramanmix.io.ledger import LedgerRepository

SAMPLE_ERRORS = (
    InputFormatError,
    BackgroundWindowError,
    OptimizationError,
    NumericsError,
    DataIOError,
)


class SampleStatus(str, Enum):
    """Final state of one sample in a batch run."""

    SKIPPED = "skipped"
    RECORDED = "recorded"
    FAILED = "failed"


@dataclass
class SampleOutcome:
    """What happened to one sample."""

    name: str
    status: SampleStatus
    heights: dict[str, float] = field(default_factory=dict)
    converged: bool = True
    message: str = ""
    result: FitResult | None = field(default=None, repr=False)


@dataclass
class BatchSummary:
    """Outcomes of a batch run, in processing order."""

    outcomes: list[SampleOutcome] = field(default_factory=list)

    def by_status(self, status: SampleStatus) -> list[SampleOutcome]:
        """Return the outcomes with ``status``."""
        return [outcome for outcome in self.outcomes if outcome.status == status]

    @property
    def recorded(self) -> list[SampleOutcome]:
        """Samples fitted and appended to the ledger."""
        return self.by_status(SampleStatus.RECORDED)

    @property
    def skipped(self) -> list[SampleOutcome]:
        """Samples already present in the ledger."""
        return self.by_status(SampleStatus.SKIPPED)

    @property
    def failed(self) -> list[SampleOutcome]:
        """Samples that could not be fitted."""
        return self.by_status(SampleStatus.FAILED)

    @property
    def unconverged(self) -> list[SampleOutcome]:
        """Recorded samples whose fit stopped at the iteration cap."""
        return [outcome for outcome in self.recorded if not outcome.converged]

    def counts(self) -> dict[str, int]:
        """Return the number of samples per status."""
        return {status.value: len(self.by_status(status)) for status in SampleStatus}

    def __len__(self) -> int:
        """Return the number of processed samples."""
        return len(self.outcomes)


class BatchRunner:
    """Fit a list of spectra against one basis and record them in a ledger."""

    def __init__(
        self,
        basis: BasisSet,
        config: RamanMixConfig,
        ledger: LedgerRepository,
        reporter: Reporter | None = None,
    ) -> None:
        """Initialize the runner.

        Args:
            basis: Calibrated materials shared by all samples
            config: Fitting, background and output configuration
            ledger: Ledger of already fitted samples
            reporter: Optional reporter for status messages (default: silent)
        """
        if list(ledger.materials) != basis.names:
            msg = f"Ledger materials {ledger.materials} do not match basis {basis.names}"
            raise LedgerIOError(msg)
        self.basis = basis
        self.config = config
        self.ledger = ledger
        self.reporter = reporter or NullReporter()
        kind = "piecewise" if config.background.mode == "piecewise" else "linear"
        self.model = MixtureModel(basis, background=kind)

    def run(
        self,
        paths: Iterable[Path],
        on_sample: Callable[[SampleOutcome], None] | None = None,
    ) -> BatchSummary:
        """Process ``paths`` sequentially.

        Args:
            paths: Spectrum files, processed in order
            on_sample: Called with each outcome as soon as it is known

        Returns
        -------
            Summary of all outcomes

        Raises
        ------
            LedgerIOError: If the ledger cannot be read or appended to
        """
        self.ledger.ensure()
        summary = BatchSummary()
        for path in paths:
            outcome = self.process(path)
            summary.outcomes.append(outcome)
            if on_sample is not None:
                on_sample(outcome)
        return summary

    def process(self, path: Path) -> SampleOutcome:
        """Fit and record one sample unless it is already in the ledger."""
        name = sample_name(path)
        try:
            if not valid_identifier(name):
                msg = f"Sample identifier {name!r} cannot be stored in the ledger"
                raise InputFormatError(msg)
            spectrum = SpectrumTable.read(path)
            if self.ledger.contains(name):
                self.reporter.info(f"{name}: already recorded, skipped")
                return SampleOutcome(name=name, status=SampleStatus.SKIPPED)

            self.reporter.action(f"Fitting {name}")
            result = self.fit(spectrum)
            write_sample_outputs(
                self.config.output.directory,
                name,
                self.model,
                result,
                save_curves=self.config.output.save_curves,
            )
        except LedgerIOError:
            raise
        except SAMPLE_ERRORS as exc:
            self.reporter.error(f"{name}: {exc}")
            return SampleOutcome(
                name=name, status=SampleStatus.FAILED, converged=False, message=str(exc)
            )

        heights = result.heights
        self.ledger.append(name, heights)
        if not result.converged:
            self.reporter.warning(f"{name}: {result.message}")
        self.reporter.success(
            f"{name}: " + " ".join(f"{material}={value:.6g}" for material, value in heights.items())
        )
        return SampleOutcome(
            name=name,
            status=SampleStatus.RECORDED,
            heights=heights,
            converged=result.converged,
            message=result.message,
            result=result,
        )

    def fit(self, spectrum: SpectrumTable) -> FitResult:
        """Estimate the background and initial heights, then run the optimizer."""
        fitting = self.config.fitting
        background = estimate_background(spectrum, self.config.background, self.config.far_end)
        heights = self.model.initial_heights(spectrum, background, fitting.guess_window)
        params = self.model.build_parameters(
            background, heights, vary_background=self.config.background.vary
        )
        # The non-converged flag on the result carries the information
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", ConvergenceWarning)
            return fit_mixture(
                self.model,
                spectrum,
                params,
                fitting.window,
                max_iterations=fitting.max_iterations,
                tolerance=fitting.tolerance,
                method=fitting.method,
            )


__all__ = [
    "SAMPLE_ERRORS",
    "BatchRunner",
    "BatchSummary",
    "SampleOutcome",
    "SampleStatus",
]
