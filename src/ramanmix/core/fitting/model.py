"""Mixture model: baseline plus height-weighted material reference curves.

    y(x) = background(x) + sum_m height_m * sum_k scale_k * voigt(x - loc_k, width_k)

Material heights enter linearly, so their Jacobian columns are the unit
reference curves, which only depend on ``x`` and are cached between calls.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

import numpy as np

from ramanmix.core.domain.background import (
    BackgroundModel,
    LinearBackground,
    PiecewiseBackground,
)
from ramanmix.core.fitting.parameters import (
    ParameterType,
    Parameters,
    background_name,
    height_name,
)
from ramanmix.core.lineshapes.functions import CurveCache

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from ramanmix.core.domain.basis import BasisSet
    from ramanmix.core.domain.spectrum import SpectrumTable
    from ramanmix.core.shared.typing import FloatArray

BackgroundKind = Literal["linear", "piecewise"]

INTERCEPT = background_name("intercept")
SLOPE = background_name("slope")
CORNER = background_name("corner")

_BACKGROUND_TYPES: dict[str, ParameterType] = {
    INTERCEPT: ParameterType.INTERCEPT,
    SLOPE: ParameterType.SLOPE,
    CORNER: ParameterType.CORNER,
}


class MixtureModel:
    """Background plus weighted sum of each material's fixed sub-peaks."""

    def __init__(self, basis: BasisSet, background: BackgroundKind = "piecewise") -> None:
        """Initialize the model.

        Args:
            basis: Calibrated materials, in output order
            background: Baseline variant, ``linear`` or ``piecewise``
        """
        self.basis = basis
        self.background_kind: BackgroundKind = background
        self._cache = CurveCache()
        self._material_of = {height_name(name): name for name in basis.names}

    @property
    def materials(self) -> list[str]:
        """Material names in order."""
        return self.basis.names

    @property
    def height_names(self) -> list[str]:
        """Height parameter names in material order."""
        return [height_name(name) for name in self.basis.names]

    @property
    def background_names(self) -> list[str]:
        """Background parameter names of the configured variant."""
        if self.background_kind == "piecewise":
            return [INTERCEPT, SLOPE, CORNER]
        return [INTERCEPT, SLOPE]

    # ------------------------------------------------------------------
    # Parameters
    # ------------------------------------------------------------------

    def build_parameters(
        self,
        background: BackgroundModel,
        heights: Mapping[str, float],
        *,
        vary_background: Iterable[str] = (),
        fixed_heights: Iterable[str] = (),
    ) -> Parameters:
        """Assemble the FitParameters of one sample.

        Args:
            background: Estimated baseline; its variant must match the model
            heights: Initial height per material name
            vary_background: Background parameters left free
                (``intercept``, ``slope``, ``corner``)
            fixed_heights: Materials whose height is held fixed

        Returns
        -------
            Parameters with heights followed by background parameters
        """
        if self.background_kind == "piecewise" and not isinstance(background, PiecewiseBackground):
            msg = "Piecewise model needs a PiecewiseBackground estimate"
            raise TypeError(msg)
        if self.background_kind == "linear" and not isinstance(background, LinearBackground):
            msg = "Linear model needs a LinearBackground estimate"
            raise TypeError(msg)

        free_background = {background_name(kind) for kind in vary_background}
        fixed = set(fixed_heights)

        params = Parameters()
        for material in self.basis.materials:
            params.add(
                height_name(material.name),
                value=float(heights[material.name]),
                vary=material.name not in fixed,
                param_type=ParameterType.HEIGHT,
            )
        for kind, value in background.as_dict().items():
            name = background_name(kind)
            params.add(
                name,
                value=float(value),
                vary=name in free_background,
                param_type=_BACKGROUND_TYPES[name],
            )
        return params

    def background_from(self, params: Parameters) -> BackgroundModel:
        """Rebuild the baseline described by ``params``."""
        if self.background_kind == "piecewise":
            return PiecewiseBackground(
                slope=params.value(SLOPE),
                intercept=params.value(INTERCEPT),
                corner=params.value(CORNER),
            )
        return LinearBackground(slope=params.value(SLOPE), intercept=params.value(INTERCEPT))

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def unit_curves(self, x: FloatArray) -> dict[str, FloatArray]:
        """Return each material's reference curve at height 1, cached per ``x``."""
        x_arr = np.ascontiguousarray(x, dtype=float)
        if not self._cache.matches(x_arr):
            curves = {material.name: material.curve(x_arr) for material in self.basis.materials}
            self._cache.store(x_arr, curves)
        return self._cache.curves

    def background(self, x: FloatArray, params: Parameters) -> FloatArray:
        """Evaluate the baseline."""
        return self.background_from(params).evaluate(x)

    def components(self, x: FloatArray, params: Parameters) -> dict[str, FloatArray]:
        """Return each material's height-scaled contribution."""
        curves = self.unit_curves(x)
        return {
            name: params.value(height_name(name)) * curve for name, curve in curves.items()
        }

    def peaks(self, x: FloatArray, params: Parameters) -> FloatArray:
        """Evaluate the summed material contributions without the baseline."""
        total = np.zeros(np.shape(x), dtype=float)
        for contribution in self.components(x, params).values():
            total += contribution
        return total

    def evaluate(self, x: FloatArray, params: Parameters) -> FloatArray:
        """Evaluate the full model ``background + peaks``."""
        return self.background(x, params) + self.peaks(x, params)

    def jacobian(self, x: FloatArray, params: Parameters, names: Sequence[str]) -> FloatArray:
        """Analytic derivatives of the model with respect to ``names``.

        Returns
        -------
            Array of shape ``(len(x), len(names))``
        """
        x_arr = np.asarray(x, dtype=float)
        curves = self.unit_curves(x_arr)
        jac = np.zeros((x_arr.size, len(names)), dtype=float)

        corner = params.value(CORNER)
        above = x_arr > corner if self.background_kind == "piecewise" else None

        for col, name in enumerate(names):
            if name == INTERCEPT:
                jac[:, col] = 1.0
            elif name == SLOPE:
                jac[:, col] = x_arr if above is None else np.where(above, x_arr - corner, 0.0)
            elif name == CORNER:
                # Zero where x <= corner; the kink itself is not differentiable
                jac[:, col] = np.where(above, -params.value(SLOPE), 0.0)
            else:
                jac[:, col] = curves[self._material_of[name]]
        return jac

    # ------------------------------------------------------------------
    # Initial guesses
    # ------------------------------------------------------------------

    def initial_heights(
        self,
        spectrum: SpectrumTable,
        background: BackgroundModel,
        guess_window: float = 5.0,
    ) -> dict[str, float]:
        """Derive a starting height per material.

        Uses the material's configured ``initial_height`` when set; otherwise the
        largest background-subtracted intensity within ``guess_window`` of the
        material's reference sub-peak. When no sample falls in that window the
        background-subtracted spectrum is interpolated at the reference location.
        """
        corrected = spectrum.y - background.evaluate(spectrum.x)
        heights: dict[str, float] = {}
        for material in self.basis.materials:
            if material.initial_height is not None:
                heights[material.name] = float(material.initial_height)
                continue
            location = material.reference_peak.location
            mask = np.abs(spectrum.x - location) < guess_window
            if np.any(mask):
                heights[material.name] = float(np.max(corrected[mask]))
            else:
                heights[material.name] = float(np.interp(location, spectrum.x, corrected))
        return heights

    def __repr__(self) -> str:
        """Return a string representation of the model."""
        return f"<MixtureModel materials={self.materials} background={self.background_kind}>"


__all__ = ["CORNER", "INTERCEPT", "SLOPE", "BackgroundKind", "MixtureModel"]
