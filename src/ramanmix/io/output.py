"""Output file writers for per-sample fitting results."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

import numpy as np

from ramanmix.core.shared.exceptions import DataIOError
from ramanmix.core.shared.reporter import NullReporter

if TYPE_CHECKING:
    from pathlib import Path

    from ramanmix.core.fitting.model import MixtureModel
    from ramanmix.core.fitting.parameters import Parameters
    from ramanmix.core.fitting.results import FitResult
    from ramanmix.core.shared.reporter import Reporter
    from ramanmix.core.shared.typing import FloatArray


class ParameterReport(BaseModel):
    """Fitted value of one parameter."""

    value: float
    stderr: float
    vary: bool
    initial: float


class SampleReport(BaseModel):
    """JSON summary of one sample's fit (``result.json``)."""

    sample: str
    method: str
    converged: bool
    message: str
    iterations: int
    nfev: int
    ndata: int
    nvarys: int
    rss: float
    redchi: float | None
    window: tuple[float, float]
    heights: dict[str, float]
    parameters: dict[str, ParameterReport]

    @classmethod
    def from_result(cls, sample: str, result: FitResult) -> SampleReport:
        """Build the report of a fit."""
        summary = result.summary()
        redchi = summary.pop("redchi")
        return cls.model_validate(
            {
                **summary,
                "sample": sample,
                "redchi": None if not np.isfinite(redchi) else redchi,
                "window": (float(result.x[0]), float(result.x[-1])),
                "heights": result.heights,
            }
        )


def format_params(params: Parameters) -> str:
    """Format parameters as ``name = value`` lines, fixed ones tagged ``# FIXED``."""
    lines = []
    for name, param in params.items():
        line = f"{name} = {param.value:.10g}"
        if param.fixed:
            line += "\t# FIXED"
        lines.append(line)
    return "\n".join(lines) + "\n"


def write_curve(path: Path, x: FloatArray, y: FloatArray) -> Path:
    """Write a two-column curve table."""
    np.savetxt(path, np.column_stack((x, y)), fmt="%.10g")
    return path


def sample_directory(directory: Path, sample: str) -> Path:
    """Return the output directory of one sample."""
    return directory / sample


def write_sample_outputs(
    directory: Path,
    sample: str,
    model: MixtureModel,
    result: FitResult,
    *,
    save_curves: bool = True,
    reporter: Reporter | None = None,
) -> Path:
    """Write the artifacts of one fitted sample.

    Files, all over the fitting window::

        data.xy              observed spectrum
        background.xy        fitted baseline
        bgremoved.xy         observed minus baseline
        fit.xy               model minus baseline
        <material>_peaks.xy  height-scaled contribution of each material
        residual.xy          observed minus model
        params.txt           fitted parameters
        result.json          fit summary

    Args:
        directory: Output root directory
        sample: Sample identifier
        model: Fitted model
        result: Fit result
        save_curves: Write the ``.xy`` curve tables
        reporter: Optional reporter for status messages (default: silent)

    Returns
    -------
        The sample's output directory

    Raises
    ------
        DataIOError: If the files cannot be written
    """
    if reporter is None:
        reporter = NullReporter()

    path = sample_directory(directory, sample)
    reporter.action(f"Writing results of {sample} to {path}")
    try:
        path.mkdir(parents=True, exist_ok=True)
        if save_curves:
            x = result.x
            background = model.background(x, result.params)
            write_curve(path / "data.xy", x, result.y)
            write_curve(path / "background.xy", x, background)
            write_curve(path / "bgremoved.xy", x, result.y - background)
            write_curve(path / "fit.xy", x, model.peaks(x, result.params))
            for material, curve in model.components(x, result.params).items():
                write_curve(path / f"{material}_peaks.xy", x, curve)
            write_curve(path / "residual.xy", x, result.residual)
        (path / "params.txt").write_text(format_params(result.params), encoding="utf-8")
        report = SampleReport.from_result(sample, result)
        (path / "result.json").write_text(report.model_dump_json(indent=2), encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot write results of {sample} to {path}: {exc}"
        raise DataIOError(msg) from exc
    return path


__all__ = [
    "ParameterReport",
    "SampleReport",
    "format_params",
    "sample_directory",
    "write_curve",
    "write_sample_outputs",
]
