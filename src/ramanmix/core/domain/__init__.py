"""Domain objects: spectra, component bases, backgrounds and configuration."""

from ramanmix.core.domain.background import (
    BackgroundModel,
    LinearBackground,
    PiecewiseBackground,
    estimate_background,
)
from ramanmix.core.domain.basis import (
    BasisSet,
    ComponentBasis,
    SubPeak,
    default_basis,
    load_basis,
)
from ramanmix.core.domain.config import (
    BackgroundConfig,
    FitConfig,
    OutputConfig,
    RamanMixConfig,
)
from ramanmix.core.domain.spectrum import SpectrumTable, sample_name

__all__ = [
    "BackgroundConfig",
    "BackgroundModel",
    "BasisSet",
    "ComponentBasis",
    "FitConfig",
    "LinearBackground",
    "OutputConfig",
    "PiecewiseBackground",
    "RamanMixConfig",
    "SpectrumTable",
    "SubPeak",
    "default_basis",
    "estimate_background",
    "load_basis",
    "sample_name",
]
