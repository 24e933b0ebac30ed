"""Least-squares optimization of the mixture model.

Two strategies are available:

- ``lm``: a bound-projected Levenberg-Marquardt loop with Marquardt diagonal
  scaling. Every iteration is one accepted step; convergence is declared when
  the relative reduction of the residual sum of squares falls below the
  tolerance. The loop is fully deterministic.
- ``trf``: scipy.optimize.least_squares with the trust region reflective
  method, using the same residuals and analytic Jacobian.

Fixed parameters are never part of the optimized vector and therefore never
move. Reaching the iteration cap returns the best point found with
``converged=False`` and emits a :class:`ConvergenceWarning`.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np
from scipy.optimize import least_squares

from ramanmix.core.fitting.results import FitResult
from ramanmix.core.shared.exceptions import ConvergenceWarning, NumericsError, OptimizationError

if TYPE_CHECKING:
    from ramanmix.core.domain.config import OptimizerMethod
    from ramanmix.core.domain.spectrum import SpectrumTable
    from ramanmix.core.fitting.model import MixtureModel
    from ramanmix.core.fitting.parameters import Parameters

LAMBDA_INIT = 1e-3
LAMBDA_MIN = 1e-12
LAMBDA_MAX = 1e12
LAMBDA_FACTOR = 10.0
DIAGONAL_FLOOR = 1e-12


@dataclass
class MixtureProblem:
    """Residuals and Jacobian of one sample restricted to its free parameters.

    Residuals are ``model - observed`` so that the Jacobian of the residuals
    equals the model Jacobian.
    """

    model: MixtureModel
    x: np.ndarray
    y: np.ndarray
    params: Parameters
    names: list[str] = field(init=False)
    lower: np.ndarray = field(init=False)
    upper: np.ndarray = field(init=False)

    def __post_init__(self) -> None:
        """Record the free parameters and their bounds."""
        self.names = self.params.get_vary_names()
        self.lower, self.upper = self.params.get_vary_bounds()

    def project(self, p: np.ndarray) -> np.ndarray:
        """Clip a parameter vector onto the bounds."""
        return np.clip(p, self.lower, self.upper)

    def residuals(self, p: np.ndarray) -> np.ndarray:
        """Return ``model(p) - y``; raises NumericsError on non-finite values."""
        if not np.all(np.isfinite(p)):
            msg = f"Non-finite parameter values: {dict(zip(self.names, p, strict=True))}"
            raise NumericsError(msg)
        self.params.set_vary_values(p)
        residual = self.model.evaluate(self.x, self.params) - self.y
        if not np.all(np.isfinite(residual)):
            msg = f"Model produced non-finite values at {dict(zip(self.names, p, strict=True))}"
            raise NumericsError(msg)
        return residual

    def jacobian(self, p: np.ndarray) -> np.ndarray:
        """Return the Jacobian of the residuals with respect to the free parameters."""
        self.params.set_vary_values(p)
        jac = self.model.jacobian(self.x, self.params, self.names)
        if not np.all(np.isfinite(jac)):
            msg = "Jacobian contains non-finite values"
            raise NumericsError(msg)
        return jac


def _solve_step(jtj: np.ndarray, gradient: np.ndarray, lam: float) -> np.ndarray:
    """Solve the damped normal equations ``(JtJ + lam * diag(JtJ)) step = -Jt r``."""
    diagonal = np.maximum(np.diag(jtj), DIAGONAL_FLOOR)
    damped = jtj + lam * np.diag(diagonal)
    try:
        return np.linalg.solve(damped, -gradient)
    except np.linalg.LinAlgError:
        return np.linalg.lstsq(damped, -gradient, rcond=None)[0]


def estimate_errors(jac: np.ndarray, rss: float, ndata: int) -> np.ndarray:
    """Asymptotic standard errors from the Jacobian at the solution."""
    nvarys = jac.shape[1]
    if ndata <= nvarys:
        return np.zeros(nvarys)
    covariance = np.linalg.pinv(jac.T @ jac) * (rss / (ndata - nvarys))
    return np.sqrt(np.clip(np.diag(covariance), 0.0, None))


def levenberg_marquardt(
    problem: MixtureProblem,
    p0: np.ndarray,
    max_iterations: int,
    tolerance: float,
) -> tuple[np.ndarray, int, int, bool, str]:
    """Run the damped Gauss-Newton loop.

    Returns
    -------
        Tuple of (best parameters, accepted iterations, function evaluations,
        converged flag, message)
    """
    p = problem.project(np.asarray(p0, dtype=float))
    residual = problem.residuals(p)
    rss = float(residual @ residual)
    nfev = 1
    lam = LAMBDA_INIT

    for iteration in range(1, max_iterations + 1):
        if rss == 0.0:
            return p, iteration - 1, nfev, True, "Exact fit"

        jac = problem.jacobian(p)
        jtj = jac.T @ jac
        gradient = jac.T @ residual

        while True:
            trial = problem.project(p + _solve_step(jtj, gradient, lam))
            trial_residual = problem.residuals(trial)
            trial_rss = float(trial_residual @ trial_residual)
            nfev += 1
            if trial_rss < rss:
                break
            lam *= LAMBDA_FACTOR
            if lam > LAMBDA_MAX:
                problem.params.set_vary_values(p)
                return p, iteration - 1, nfev, True, "No further reduction of the sum of squares"

        reduction = (rss - trial_rss) / trial_rss if trial_rss > 0 else np.inf
        p, residual, rss = trial, trial_residual, trial_rss
        lam = max(lam / LAMBDA_FACTOR, LAMBDA_MIN)

        if rss == 0.0 or reduction < tolerance:
            return p, iteration, nfev, True, "Relative reduction of the sum of squares below tolerance"

    problem.params.set_vary_values(p)
    return p, max_iterations, nfev, False, f"Maximum number of iterations ({max_iterations}) reached"


def trust_region(
    problem: MixtureProblem,
    p0: np.ndarray,
    max_iterations: int,
    tolerance: float,
) -> tuple[np.ndarray, int, int, bool, str]:
    """Run scipy's trust region reflective solver on the same problem."""
    tol = max(tolerance, float(np.finfo(float).eps))
    result = least_squares(
        problem.residuals,
        problem.project(np.asarray(p0, dtype=float)),
        jac=problem.jacobian,
        bounds=(problem.lower, problem.upper),
        method="trf",
        ftol=tol,
        xtol=tol,
        gtol=tol,
        max_nfev=max_iterations,
    )
    problem.params.set_vary_values(result.x)
    return result.x, int(result.nfev), int(result.nfev), bool(result.status > 0), str(result.message)


_STRATEGIES = {
    "lm": levenberg_marquardt,
    "trf": trust_region,
}


def fit_mixture(
    model: MixtureModel,
    spectrum: SpectrumTable,
    params: Parameters,
    window: tuple[float, float],
    *,
    max_iterations: int = 1000,
    tolerance: float = 1e-10,
    method: OptimizerMethod = "lm",
) -> FitResult:
    """Fit the mixture model to a spectrum over the fitting window.

    Args:
        model: Mixture model
        spectrum: Full spectrum; only samples with ``lo <= x <= hi`` are fitted
        params: Initial parameters; left unmodified
        window: Fitting window ``(lo, hi)``
        max_iterations: Iteration cap
        tolerance: Relative sum-of-squares reduction defining convergence
        method: ``lm`` or ``trf``

    Returns
    -------
        FitResult with the fitted parameters (standard errors filled in)

    Raises
    ------
        OptimizationError: If the window holds no samples, there are fewer
            samples than free parameters, or the method is unknown
        NumericsError: If the model produces non-finite values
    """
    if max_iterations < 1:
        msg = f"max_iterations must be positive, got {max_iterations}"
        raise OptimizationError(msg)
    try:
        strategy = _STRATEGIES[method]
    except KeyError:
        msg = f"Unknown optimizer method: {method!r}"
        raise OptimizationError(msg) from None

    lo, hi = window
    mask = (spectrum.x >= lo) & (spectrum.x <= hi)
    x = np.array(spectrum.x[mask], dtype=float)
    y = np.array(spectrum.y[mask], dtype=float)
    if x.size == 0:
        msg = f"Fitting window [{lo:g}, {hi:g}] of {spectrum.name or 'spectrum'} holds no samples"
        raise OptimizationError(msg)

    initial = params.copy()
    problem = MixtureProblem(model=model, x=x, y=y, params=params.copy())

    if not problem.names:
        residual = problem.residuals(problem.params.get_vary_values())
        return FitResult(
            params=problem.params,
            x=x,
            y=y,
            residual=-residual,
            iterations=0,
            converged=True,
            message="No free parameters",
            method=method,
            nfev=1,
            initial=initial,
        )

    if x.size < len(problem.names):
        msg = (
            f"Fitting window holds {x.size} sample(s) for "
            f"{len(problem.names)} free parameter(s)"
        )
        raise OptimizationError(msg)

    p, iterations, nfev, converged, message = strategy(
        problem, problem.params.get_vary_values(), max_iterations, tolerance
    )
    if not converged:
        warnings.warn(
            f"{spectrum.name or 'Fit'}: {message}", ConvergenceWarning, stacklevel=2
        )

    residual = problem.residuals(p)
    rss = float(residual @ residual)
    problem.params.set_errors(estimate_errors(problem.jacobian(p), rss, x.size))

    return FitResult(
        params=problem.params,
        x=x,
        y=y,
        residual=-residual,
        iterations=iterations,
        converged=converged,
        message=message,
        method=method,
        nfev=nfev,
        initial=initial,
    )


__all__ = [
    "MixtureProblem",
    "estimate_errors",
    "fit_mixture",
    "levenberg_marquardt",
    "trust_region",
]
