"""Calibrated component bases: per-material sets of fixed Voigt sub-peaks.

A basis is produced by an external single-material calibration (fitting a pure
reference spectrum to a sum of Voigt peaks and freezing the result) and is
consumed read-only here. It is stored as data rather than inlined per
material::

    [[materials]]
    name = "carbonate"
    reference = 2
    peaks = [
        { location = 713.0, scale = 0.0400859, width = 5.10 },
        { location = 1087.0, scale = 1.0, width = 2.64 },
    ]
"""

from __future__ import annotations

import json
import tomllib
from importlib import resources
from pathlib import Path
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

import numpy as np

from ramanmix.core.lineshapes.functions import sum_of_peaks
from ramanmix.core.shared.exceptions import BasisConfigError
from ramanmix.core.shared.typing import FloatArray

DEFAULT_BASIS_RESOURCE = "pvc_blend.toml"


class SubPeak(BaseModel):
    """One fixed Voigt band of a material's reference spectrum."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    location: float = Field(description="Band center (cm-1)")
    scale: Annotated[float, Field(gt=0.0, le=1.0)] = Field(
        description="Amplitude relative to the material's strongest band"
    )
    width: Annotated[float, Field(gt=0.0)] = Field(description="Voigt width (cm-1)")

    def as_tuple(self) -> tuple[float, float, float]:
        """Return ``(location, scale, width)``."""
        return self.location, self.scale, self.width


class ComponentBasis(BaseModel):
    """Ordered, immutable sub-peak set of one reference material."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1, pattern=r"^\S+$")
    peaks: tuple[SubPeak, ...]
    reference: int | None = Field(
        default=None,
        description="1-based index of the sub-peak used for the initial height guess.",
    )
    initial_height: float | None = Field(
        default=None,
        description="Fixed starting height; skips the measured guess when set.",
    )

    @model_validator(mode="after")
    def validate_peaks(self) -> ComponentBasis:
        """Require at least one sub-peak and a valid reference index."""
        if not self.peaks:
            msg = f"Material {self.name!r} has no sub-peaks"
            raise ValueError(msg)
        if self.reference is not None and not 1 <= self.reference <= len(self.peaks):
            msg = (
                f"Material {self.name!r}: reference {self.reference} "
                f"outside 1..{len(self.peaks)}"
            )
            raise ValueError(msg)
        return self

    @property
    def reference_peak(self) -> SubPeak:
        """Sub-peak that drives the initial height guess.

        Defaults to the first sub-peak with the largest relative scale.
        """
        if self.reference is not None:
            return self.peaks[self.reference - 1]
        index = int(np.argmax([peak.scale for peak in self.peaks]))
        return self.peaks[index]

    @property
    def height_name(self) -> str:
        """Parameter/ledger column name of this material's height."""
        return f"{self.name}_height"

    def curve(self, x: FloatArray) -> FloatArray:
        """Evaluate the unit-height reference curve on ``x``."""
        return sum_of_peaks(x, (peak.as_tuple() for peak in self.peaks))

    def __len__(self) -> int:
        """Return the number of sub-peaks."""
        return len(self.peaks)


class BasisSet(BaseModel):
    """All materials of a mixture fit, in ledger column order."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    materials: tuple[ComponentBasis, ...]

    @model_validator(mode="after")
    def validate_materials(self) -> BasisSet:
        """Require at least one material and unique names."""
        if not self.materials:
            msg = "Basis defines no materials"
            raise ValueError(msg)
        names = [material.name for material in self.materials]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            msg = f"Duplicate material names: {', '.join(duplicates)}"
            raise ValueError(msg)
        return self

    @property
    def names(self) -> list[str]:
        """Material names in order."""
        return [material.name for material in self.materials]

    def __len__(self) -> int:
        """Return the number of materials."""
        return len(self.materials)

    def __getitem__(self, name: str) -> ComponentBasis:
        """Return the material called ``name``."""
        for material in self.materials:
            if material.name == name:
                return material
        raise KeyError(name)


def basis_from_dict(data: dict[str, Any]) -> BasisSet:
    """Validate a parsed basis document.

    Raises
    ------
        BasisConfigError: If any material is invalid
    """
    try:
        return BasisSet.model_validate(data)
    except ValidationError as exc:
        msg = f"Invalid component basis: {exc}"
        raise BasisConfigError(msg) from exc


def load_basis(path: Path) -> BasisSet:
    """Load a component basis from a TOML or JSON file.

    Raises
    ------
        BasisConfigError: If the file is missing, unparseable or invalid
    """
    path = Path(path)
    if not path.is_file():
        msg = f"Basis file not found: {path}"
        raise BasisConfigError(msg)

    try:
        if path.suffix.lower() == ".json":
            data = json.loads(path.read_text(encoding="utf-8"))
        else:
            with path.open("rb") as f:
                data = tomllib.load(f)
    except (OSError, ValueError) as exc:
        msg = f"Cannot read basis file {path}: {exc}"
        raise BasisConfigError(msg) from exc

    return basis_from_dict(data)


def default_basis() -> BasisSet:
    """Load the calibrated PVC / carbonate / DOTP / fluorescence basis shipped with ramanmix."""
    resource = resources.files("ramanmix.data").joinpath(DEFAULT_BASIS_RESOURCE)
    with resource.open("rb") as f:
        data = tomllib.load(f)
    return basis_from_dict(data)


__all__ = [
    "BasisSet",
    "ComponentBasis",
    "SubPeak",
    "basis_from_dict",
    "default_basis",
    "load_basis",
]
