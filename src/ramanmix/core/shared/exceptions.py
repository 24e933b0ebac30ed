"""Exception taxonomy for ramanmix.

This module defines a small, coherent hierarchy of exceptions to improve
error handling across the codebase. Use these instead of generic Exception
to communicate intent and allow callers to handle errors precisely.

Batch processing relies on the split between per-sample failures
(``InputFormatError``, ``BackgroundWindowError``, ``OptimizationError``,
``NumericsError``) and run-level failures (``BasisConfigError``,
``LedgerIOError``).
"""

from __future__ import annotations


class RamanMixError(Exception):
    """Base class for all ramanmix-specific exceptions."""


class ConfigError(RamanMixError):
    """Configuration-related errors (invalid/missing options, schema issues)."""


class BasisConfigError(ConfigError):
    """Invalid component basis (no sub-peaks, non-positive width, bad file)."""


class BackgroundWindowError(ConfigError):
    """A background estimation window holds too few spectrum samples."""


class DataIOError(RamanMixError):
    """Data loading/saving errors (files, formats, permissions)."""


class InputFormatError(DataIOError):
    """Malformed or empty spectrum table."""


class LedgerIOError(DataIOError):
    """The results ledger cannot be read, created or appended to."""


class OptimizationError(RamanMixError):
    """Errors occurring during optimization."""


class NumericsError(RamanMixError):
    """Numeric instability or invalid arithmetic conditions (NaNs, overflows)."""


class ConvergenceWarning(UserWarning):
    """The optimizer stopped at its iteration cap before converging."""


__all__ = [
    "BackgroundWindowError",
    "BasisConfigError",
    "ConfigError",
    "ConvergenceWarning",
    "DataIOError",
    "InputFormatError",
    "LedgerIOError",
    "NumericsError",
    "OptimizationError",
    "RamanMixError",
]
