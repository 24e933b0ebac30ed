"""Domain configuration models for ramanmix."""

from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

BackgroundMode = Literal["piecewise", "flat", "linear"]
BackgroundParameter = Literal["intercept", "slope", "corner"]
OptimizerMethod = Literal["lm", "trf"]


class FitConfig(BaseModel):
    """Configuration for the mixture fit.

    Example:
        [fitting]
        window = [600.0, 1150.0]
        max_iterations = 1000
        tolerance = 1e-10
        method = "lm"
    """

    model_config = ConfigDict(extra="forbid")

    window: tuple[float, float] = Field(
        default=(600.0, 1150.0),
        description="Fitting domain [lo, hi] in cm-1.",
    )
    max_iterations: Annotated[int, Field(gt=0)] = Field(
        default=1000,
        description="Maximum number of optimizer iterations.",
    )
    tolerance: Annotated[float, Field(gt=0, lt=1)] = Field(
        default=1e-10,
        description="Relative sum-of-squares reduction below which the fit has converged.",
    )
    method: OptimizerMethod = Field(
        default="lm",
        description="Optimizer: lm (Levenberg-Marquardt) or trf (scipy trust region).",
    )
    guess_window: Annotated[float, Field(gt=0)] = Field(
        default=5.0,
        description="Half width (cm-1) around the reference band used for initial heights.",
    )

    @field_validator("window")
    @classmethod
    def validate_window(cls, v: tuple[float, float]) -> tuple[float, float]:
        """Require an increasing fitting window."""
        if v[0] >= v[1]:
            msg = f"Fitting window lower bound must be below upper bound, got {v}"
            raise ValueError(msg)
        return v


class BackgroundConfig(BaseModel):
    """Configuration for the baseline model and its estimation.

    Modes:
        piecewise: flat at ``intercept`` up to ``corner``, linear above it
        flat: constant at the global minimum intensity
        linear: straight line through the first and last samples
    """

    model_config = ConfigDict(extra="forbid")

    mode: BackgroundMode = Field(default="piecewise", description="Background model variant.")
    corner: float = Field(default=900.0, description="Piecewise corner wavenumber (cm-1).")
    upper: float | None = Field(
        default=None,
        description="Far-end reference wavenumber; defaults to the fitting window upper bound.",
    )
    corner_window: Annotated[float, Field(gt=0)] = Field(
        default=200.0,
        description="Width (cm-1) of the window preceding the corner for the intercept.",
    )
    margin: Annotated[float, Field(gt=0)] = Field(
        default=5.0,
        description="Half width (cm-1) of the windows around the corner and far end.",
    )
    min_points: Annotated[int, Field(ge=1)] = Field(
        default=1,
        description="Minimum number of samples in an estimation window.",
    )
    vary: list[BackgroundParameter] = Field(
        default_factory=list,
        description="Background parameters left free during the fit (fixed otherwise).",
    )

    @field_validator("vary")
    @classmethod
    def validate_vary(cls, v: list[BackgroundParameter]) -> list[BackgroundParameter]:
        """Remove duplicates, keeping order."""
        return list(dict.fromkeys(v))


class OutputConfig(BaseModel):
    """Configuration for ledger and per-sample outputs."""

    model_config = ConfigDict(extra="forbid")

    directory: Path = Field(default=Path("results"), description="Per-sample output directory.")
    ledger: Path = Field(
        default=Path("acombinedresults.txt"),
        description="Ledger of fitted samples and heights.",
    )
    save_curves: bool = Field(default=True, description="Write per-sample curve tables.")
    headless: bool = Field(
        default=False,
        description="Disable interactive/live display (reporter-only output).",
    )
    log_file: Path | None = Field(default=None, description="Optional log file path.")


class RamanMixConfig(BaseModel):
    """Top-level configuration for mixture fitting.

    Example TOML configuration:
        basis = "basis.toml"

        [fitting]
        window = [600.0, 1150.0]
        tolerance = 1e-10

        [background]
        mode = "piecewise"
        corner = 900.0
        upper = 1250.0
        vary = ["intercept"]

        [output]
        directory = "results"
        ledger = "acombinedresults.txt"
    """

    model_config = ConfigDict(extra="forbid")

    basis: Path | None = Field(
        default=None,
        description="Component basis file (TOML/JSON). Defaults to the packaged basis.",
    )
    fitting: FitConfig = Field(default_factory=FitConfig)
    background: BackgroundConfig = Field(default_factory=BackgroundConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @model_validator(mode="after")
    def validate_background_span(self) -> "RamanMixConfig":
        """Require the far-end reference to lie above the piecewise corner."""
        if self.background.mode == "piecewise" and self.far_end <= self.background.corner:
            msg = (
                f"Background far end ({self.far_end}) must lie above "
                f"the corner ({self.background.corner})"
            )
            raise ValueError(msg)
        return self

    @property
    def far_end(self) -> float:
        """Wavenumber of the far-end background reference."""
        if self.background.upper is not None:
            return self.background.upper
        return self.fitting.window[1]


__all__ = [
    "BackgroundConfig",
    "BackgroundMode",
    "BackgroundParameter",
    "FitConfig",
    "OptimizerMethod",
    "OutputConfig",
    "RamanMixConfig",
]
