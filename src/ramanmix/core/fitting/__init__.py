"""Mixture fitting: parameters, model, optimizer and results."""

from ramanmix.core.fitting.model import CORNER, INTERCEPT, SLOPE, MixtureModel
from ramanmix.core.fitting.optimizer import fit_mixture
from ramanmix.core.fitting.parameters import (
    Parameter,
    Parameters,
    ParameterType,
    background_name,
    height_name,
)
from ramanmix.core.fitting.results import FitResult

__all__ = [
    "CORNER",
    "INTERCEPT",
    "SLOPE",
    "FitResult",
    "MixtureModel",
    "Parameter",
    "ParameterType",
    "Parameters",
    "background_name",
    "fit_mixture",
    "height_name",
]
