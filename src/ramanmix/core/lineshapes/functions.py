"""Pure NumPy/SciPy lineshape functions for Raman band fitting.

Every calibrated sub-peak is modelled with the same Voigt profile, the real
part of the Faddeeva function ``w(z) = exp(-z**2) erfc(-iz)``:

    voigt(dx, width) = Re[w(dx + i * width)]

This is the convolution of a Gaussian of standard deviation ``1/sqrt(2)``
(in wavenumber units) with a Lorentzian of half width ``width``, scaled so that
its integral over ``dx`` is ``sqrt(pi)``. It is the function gnuplot exposes as
``voigt(x, y)``, which the stored calibration widths refer to.

Properties relied upon by the fitting code:
- continuous in ``dx`` and symmetric: ``voigt(-dx, w) == voigt(dx, w)``
- strictly unimodal with its maximum at ``dx == 0`` for ``w > 0``
- ``scipy.special.wofz`` is accurate to ~1e-13 relative, far below the 1e-9
  absolute precision needed by the optimizer

Unit curves (height = 1) of a whole material only depend on the sample
positions, so they are cached per ``x`` array and shared between residual and
Jacobian evaluations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np
from scipy.special import wofz

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ramanmix.core.shared.typing import FloatArray


def voigt(dx: FloatArray | float, width: float) -> FloatArray:
    """Evaluate the Voigt profile at offsets ``dx`` from the band center.

    Args:
        dx: Wavenumber offset(s) from the band center (cm-1)
        width: Lorentzian half width (cm-1), must be positive

    Returns
    -------
        Profile values with the same shape as ``dx``
    """
    if width <= 0.0:
        msg = f"Voigt width must be positive, got {width}"
        raise ValueError(msg)
    z = np.asarray(dx, dtype=float) + 1j * width
    return np.real(wofz(z))


def sum_of_peaks(
    x: FloatArray, peaks: Iterable[tuple[float, float, float]]
) -> FloatArray:
    """Evaluate ``sum(scale * voigt(x - location, width))`` over ``peaks``.

    Args:
        x: Wavenumbers (cm-1)
        peaks: ``(location, scale, width)`` triples

    Returns
    -------
        Summed profile with the same shape as ``x``
    """
    x_arr = np.asarray(x, dtype=float)
    total = np.zeros_like(x_arr)
    for location, scale, width in peaks:
        total += scale * voigt(x_arr - location, width)
    return total


@dataclass(slots=True)
class CurveCache:
    """Cache of evaluated curves keyed on the content of the ``x`` array."""

    x_hash: int = 0
    curves: dict[str, FloatArray] = field(default_factory=dict)

    def matches(self, x: FloatArray) -> bool:
        """Check if the cached curves were evaluated on ``x``."""
        return bool(self.curves) and hash(x.tobytes()) == self.x_hash

    def store(self, x: FloatArray, curves: dict[str, FloatArray]) -> None:
        """Replace the cache content."""
        self.x_hash = hash(x.tobytes())
        self.curves = curves


__all__ = ["CurveCache", "sum_of_peaks", "voigt"]
