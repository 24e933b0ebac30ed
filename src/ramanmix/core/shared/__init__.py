"""Shared foundational utilities for ramanmix."""

from ramanmix.core.shared import reporter, typing
from ramanmix.core.shared.exceptions import (
    BackgroundWindowError,
    BasisConfigError,
    ConfigError,
    ConvergenceWarning,
    DataIOError,
    InputFormatError,
    LedgerIOError,
    NumericsError,
    OptimizationError,
    RamanMixError,
)
from ramanmix.core.shared.reporter import NullReporter, Reporter

__all__ = [
    "BackgroundWindowError",
    "BasisConfigError",
    "ConfigError",
    "ConvergenceWarning",
    "DataIOError",
    "InputFormatError",
    "LedgerIOError",
    "NullReporter",
    "NumericsError",
    "OptimizationError",
    "RamanMixError",
    "Reporter",
    "reporter",
    "typing",
]
