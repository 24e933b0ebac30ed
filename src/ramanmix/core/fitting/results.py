"""Fitting result classes and utilities."""

from dataclasses import dataclass, field

import numpy as np

from ramanmix.core.fitting.parameters import ParameterType, Parameters


@dataclass
class FitResult:
    """Result of one mixture fit over the fitting window."""

    params: Parameters
    x: np.ndarray
    y: np.ndarray
    residual: np.ndarray  # y_observed - y_model, one value per sample
    iterations: int
    converged: bool
    message: str
    method: str = "lm"
    nfev: int = 0
    initial: Parameters = field(default_factory=Parameters)

    @property
    def rss(self) -> float:
        """Residual sum of squares."""
        return float(np.sum(self.residual**2))

    @property
    def ndata(self) -> int:
        """Number of samples in the fitting window."""
        return int(self.residual.size)

    @property
    def nvarys(self) -> int:
        """Number of free parameters."""
        return len(self.params.get_vary_names())

    @property
    def redchi(self) -> float:
        """Residual sum of squares per degree of freedom."""
        dof = self.ndata - self.nvarys
        return self.rss / dof if dof > 0 else float("nan")

    @property
    def heights(self) -> dict[str, float]:
        """Fitted height per material, keyed by material name."""
        return {
            param.name.removesuffix("_height"): param.value
            for param in self.params.get_by_type(ParameterType.HEIGHT)
        }

    def summary(self) -> dict[str, object]:
        """Return a JSON-friendly summary of the fit."""
        return {
            "method": self.method,
            "converged": self.converged,
            "message": self.message,
            "iterations": self.iterations,
            "nfev": self.nfev,
            "ndata": self.ndata,
            "nvarys": self.nvarys,
            "rss": self.rss,
            "redchi": self.redchi,
            "parameters": {
                name: {
                    "value": param.value,
                    "stderr": param.stderr,
                    "vary": param.vary,
                    "initial": self.initial.value(name, param.value),
                }
                for name, param in self.params.items()
            },
        }
