"""Parameter management for mixture fitting.

Every model parameter carries an explicit ``vary`` flag (free or fixed) that
the optimizer consumes uniformly; fixed parameters never move.
"""

from __future__ import annotations

from collections.abc import ItemsView, Iterator, KeysView, ValuesView  # noqa: TC003
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

import numpy as np

BACKGROUND_PREFIX = "background"


class ParameterType(str, Enum):
    """Types of mixture fitting parameters."""

    HEIGHT = "height"  # Scale factor of a whole material
    INTERCEPT = "intercept"  # Background level
    SLOPE = "slope"  # Background slope
    CORNER = "corner"  # Background corner wavenumber


_PARAM_TYPE_UNITS: dict[ParameterType, str] = {
    ParameterType.HEIGHT: "",
    ParameterType.INTERCEPT: "counts",
    ParameterType.SLOPE: "counts/cm-1",
    ParameterType.CORNER: "cm-1",
}


def height_name(material: str) -> str:
    """Parameter name of a material height (``pvc`` -> ``pvc_height``)."""
    return f"{material}_height"


def background_name(kind: str) -> str:
    """Parameter name of a background parameter (``slope`` -> ``background.slope``)."""
    return f"{BACKGROUND_PREFIX}.{kind}"


class Parameter(BaseModel):
    """Single fitting parameter with bounds and a free/fixed flag."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    name: str
    value: float
    min: float = -np.inf
    max: float = np.inf
    vary: bool = True
    param_type: ParameterType = ParameterType.HEIGHT
    unit: str = ""
    stderr: float = 0.0

    @model_validator(mode="before")
    @classmethod
    def set_type_defaults(cls, data: Any) -> Any:
        """Fill in the unit from the parameter type when not given."""
        if not isinstance(data, dict) or data.get("unit"):
            return data
        try:
            param_type = ParameterType(data.get("param_type", ParameterType.HEIGHT))
        except ValueError:
            return data
        data["unit"] = _PARAM_TYPE_UNITS[param_type]
        return data

    @model_validator(mode="after")
    def validate_parameter(self) -> Parameter:
        """Validate parameter bounds."""
        if self.min > self.max:
            msg = f"Parameter {self.name}: min ({self.min}) > max ({self.max})"
            raise ValueError(msg)
        if not self.min <= self.value <= self.max:
            msg = (
                f"Parameter {self.name}: value ({self.value}) "
                f"outside bounds [{self.min}, {self.max}]"
            )
            raise ValueError(msg)
        return self

    @property
    def fixed(self) -> bool:
        """True when the optimizer must leave this parameter untouched."""
        return not self.vary

    def __repr__(self) -> str:
        """Return a string representation of the parameter."""
        vary_str = "vary" if self.vary else "fixed"
        min_str = f"{self.min:.4g}" if self.min > -1e10 else "-inf"
        max_str = f"{self.max:.4g}" if self.max < 1e10 else "inf"
        unit_str = f" {self.unit}" if self.unit else ""
        return (
            f"<Parameter {self.name}={self.value:.6g}{unit_str} "
            f"[{min_str}, {max_str}] ({vary_str})>"
        )


class Parameters(BaseModel):
    """Ordered collection of fitting parameters (the FitParameters of a sample)."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    params: dict[str, Parameter] = Field(default_factory=dict)

    def add(
        self,
        name: str,
        value: float = 0.0,
        min: float = -np.inf,
        max: float = np.inf,
        vary: bool = True,
        param_type: ParameterType = ParameterType.HEIGHT,
        unit: str = "",
    ) -> None:
        """Add a parameter."""
        self.params[name] = Parameter(
            name=name,
            value=value,
            min=min,
            max=max,
            vary=vary,
            param_type=param_type,
            unit=unit,
        )

    def __getitem__(self, key: str) -> Parameter:
        """Get parameter by name."""
        return self.params[key]

    def __contains__(self, key: str) -> bool:
        """Check if parameter exists."""
        return key in self.params

    def __iter__(self) -> Iterator[str]:  # type: ignore[override]
        """Iterate over parameter names."""
        return iter(self.params)

    def keys(self) -> KeysView[str]:
        """Get parameter names."""
        return self.params.keys()

    def values(self) -> ValuesView[Parameter]:
        """Get parameter objects."""
        return self.params.values()

    def items(self) -> ItemsView[str, Parameter]:
        """Get parameter name-value pairs."""
        return self.params.items()

    def copy(self) -> Parameters:  # type: ignore[override]
        """Create a deep copy of parameters."""
        new_params = Parameters()
        for name, param in self.params.items():
            new_params.params[name] = param.model_copy()
        return new_params

    def value(self, name: str, default: float = 0.0) -> float:
        """Return the value of ``name`` or ``default`` when absent."""
        param = self.params.get(name)
        return default if param is None else param.value

    def get_vary_names(self) -> list[str]:
        """Get names of free parameters."""
        return [name for name, param in self.params.items() if param.vary]

    def get_vary_values(self) -> np.ndarray:
        """Get values of free parameters as array."""
        return np.array([self.params[name].value for name in self.get_vary_names()], dtype=float)

    def get_vary_bounds(self) -> tuple[np.ndarray, np.ndarray]:
        """Get bounds for free parameters."""
        names = self.get_vary_names()
        lower = np.array([self.params[name].min for name in names], dtype=float)
        upper = np.array([self.params[name].max for name in names], dtype=float)
        return lower, upper

    def set_vary_values(self, values: np.ndarray) -> None:
        """Set values of free parameters from array."""
        names = self.get_vary_names()
        for name, value in zip(names, values, strict=True):
            self.params[name].value = float(value)

    def set_errors(self, errors: np.ndarray) -> None:
        """Set standard errors for free parameters."""
        names = self.get_vary_names()
        for name, error in zip(names, errors, strict=True):
            self.params[name].stderr = float(error)

    def get_by_type(self, param_type: ParameterType) -> list[Parameter]:
        """Get all parameters of a specific type."""
        return [p for p in self.params.values() if p.param_type == param_type]

    def __len__(self) -> int:
        """Return number of parameters."""
        return len(self.params)

    def __repr__(self) -> str:
        """Return a string representation of the parameters collection."""
        return f"<Parameters: {len(self.params)} total, {len(self.get_vary_names())} varying>"


__all__ = [
    "BACKGROUND_PREFIX",
    "Parameter",
    "ParameterType",
    "Parameters",
    "background_name",
    "height_name",
]
