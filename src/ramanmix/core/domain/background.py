"""Baseline models and their estimation from designated spectrum windows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from ramanmix.core.shared.exceptions import BackgroundWindowError

if TYPE_CHECKING:
    from ramanmix.core.domain.config import BackgroundConfig
    from ramanmix.core.domain.spectrum import SpectrumTable
    from ramanmix.core.shared.typing import FloatArray


@dataclass(frozen=True)
class LinearBackground:
    """Straight baseline ``intercept + slope * x``; flat when ``slope == 0``."""

    slope: float
    intercept: float

    def evaluate(self, x: FloatArray) -> FloatArray:
        """Evaluate the baseline on ``x``."""
        return self.intercept + self.slope * np.asarray(x, dtype=float)

    def as_dict(self) -> dict[str, float]:
        """Return the parameter values by name."""
        return {"intercept": self.intercept, "slope": self.slope}


@dataclass(frozen=True)
class PiecewiseBackground:
    """Dog-leg baseline: flat at ``intercept`` up to ``corner``, linear above."""

    slope: float
    intercept: float
    corner: float

    def evaluate(self, x: FloatArray) -> FloatArray:
        """Evaluate the baseline on ``x``."""
        x_arr = np.asarray(x, dtype=float)
        return np.where(
            x_arr > self.corner,
            self.intercept + self.slope * (x_arr - self.corner),
            self.intercept,
        )

    def as_dict(self) -> dict[str, float]:
        """Return the parameter values by name."""
        return {"intercept": self.intercept, "slope": self.slope, "corner": self.corner}


BackgroundModel = LinearBackground | PiecewiseBackground


def _window_minimum(
    spectrum: SpectrumTable, lo: float, hi: float, min_points: int, label: str
) -> float:
    """Return the smallest intensity with ``lo < x < hi``.

    The minimum (not the mean) tolerates downward noise spikes while staying
    below the true signal.
    """
    mask = (spectrum.x > lo) & (spectrum.x < hi)
    n_points = int(np.count_nonzero(mask))
    if n_points < min_points:
        msg = (
            f"{label} window ({lo:g}, {hi:g}) of {spectrum.name or 'spectrum'} "
            f"holds {n_points} point(s), at least {min_points} required"
        )
        raise BackgroundWindowError(msg)
    return float(np.min(spectrum.y[mask]))


def estimate_flat(spectrum: SpectrumTable) -> LinearBackground:
    """Flat baseline at the global minimum intensity."""
    return LinearBackground(slope=0.0, intercept=spectrum.minimum())


def estimate_linear(spectrum: SpectrumTable) -> LinearBackground:
    """Straight line through the first and last samples of the spectrum."""
    x_first, x_last = spectrum.x_range
    if len(spectrum) < 2 or x_last == x_first:
        msg = f"Cannot draw a linear background through {spectrum.name or 'spectrum'}"
        raise BackgroundWindowError(msg)
    slope = (float(spectrum.y[-1]) - float(spectrum.y[0])) / (x_last - x_first)
    intercept = float(spectrum.y[-1]) - slope * x_last
    return LinearBackground(slope=slope, intercept=intercept)


def estimate_piecewise(
    spectrum: SpectrumTable,
    corner: float,
    upper: float,
    *,
    corner_window: float = 200.0,
    margin: float = 5.0,
    min_points: int = 1,
) -> PiecewiseBackground:
    """Estimate a dog-leg baseline from two windows of the spectrum.

    Args:
        spectrum: Spectrum to estimate from
        corner: Wavenumber where the flat section turns into the sloped one
        upper: Far-end reference wavenumber (usually the fitting upper bound)
        corner_window: Width of the window preceding the corner
        margin: Half width of the far-end window and overshoot past the corner
        min_points: Minimum number of samples required in each window

    Returns
    -------
        Piecewise background with slope through both window minima

    Raises
    ------
        BackgroundWindowError: If a window holds fewer than ``min_points`` samples
    """
    if upper <= corner:
        msg = f"Far end ({upper:g}) must lie above the corner ({corner:g})"
        raise BackgroundWindowError(msg)
    intercept = _window_minimum(
        spectrum, corner - corner_window, corner + margin, min_points, "Corner"
    )
    far_end = _window_minimum(spectrum, upper - margin, upper + margin, min_points, "Far-end")
    slope = (far_end - intercept) / (upper - corner)
    return PiecewiseBackground(slope=slope, intercept=intercept, corner=corner)


def estimate_background(
    spectrum: SpectrumTable, config: BackgroundConfig, upper: float
) -> BackgroundModel:
    """Estimate the configured background variant.

    Args:
        spectrum: Full (unwindowed) spectrum
        config: Background configuration
        upper: Far-end reference wavenumber used by the piecewise mode
    """
    if config.mode == "flat":
        return estimate_flat(spectrum)
    if config.mode == "linear":
        return estimate_linear(spectrum)
    return estimate_piecewise(
        spectrum,
        config.corner,
        upper,
        corner_window=config.corner_window,
        margin=config.margin,
        min_points=config.min_points,
    )


__all__ = [
    "BackgroundModel",
    "LinearBackground",
    "PiecewiseBackground",
    "estimate_background",
    "estimate_flat",
    "estimate_linear",
    "estimate_piecewise",
]
