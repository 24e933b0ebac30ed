"""ramanmix - Raman mixture decomposition against calibrated reference materials.

Public API:
    - ramanmix.services.BatchRunner / BatchPipeline: Fit lists of spectra and record them
    - MixtureModel, fit_mixture: Single-spectrum fitting

Configuration:
    - RamanMixConfig: Main configuration object
    - FitConfig, BackgroundConfig, OutputConfig: Sub-configurations

Domain Objects:
    - SpectrumTable, BasisSet, ComponentBasis, SubPeak
"""

import contextlib
from importlib import metadata

__version__ = "0.1.0"

with contextlib.suppress(metadata.PackageNotFoundError):
    __version__ = metadata.version(__name__)

from ramanmix.core.domain.basis import (  # noqa: E402
    BasisSet,
    ComponentBasis,
    SubPeak,
    default_basis,
    load_basis,
)
from ramanmix.core.domain.config import (  # noqa: E402
    BackgroundConfig,
    FitConfig,
    OutputConfig,
    RamanMixConfig,
)
from ramanmix.core.domain.spectrum import SpectrumTable  # noqa: E402
from ramanmix.core.fitting import FitResult, MixtureModel, fit_mixture  # noqa: E402
from ramanmix.io.ledger import LedgerRepository  # noqa: E402

__all__ = [
    # Version
    "__version__",
    # Fitting
    "FitResult",
    "MixtureModel",
    "fit_mixture",
    "LedgerRepository",
    # Configuration
    "RamanMixConfig",
    "FitConfig",
    "BackgroundConfig",
    "OutputConfig",
    # Domain
    "BasisSet",
    "ComponentBasis",
    "SpectrumTable",
    "SubPeak",
    "default_basis",
    "load_basis",
]
