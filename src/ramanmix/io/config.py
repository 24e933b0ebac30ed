"""Configuration file loading and saving."""

import tomllib
from pathlib import Path

import tomli_w
from pydantic import ValidationError

from ramanmix.core.domain.config import RamanMixConfig
from ramanmix.core.shared.exceptions import ConfigError


def load_config(path: Path) -> RamanMixConfig:
    """Load configuration from a TOML file.

    A relative ``basis`` path is resolved against the configuration file's
    directory.

    Args:
        path: Path to the TOML configuration file.

    Returns:
        RamanMixConfig: Validated configuration object.

    Raises:
        ConfigError: If the file is missing, not valid TOML or fails validation.
    """
    if not path.exists():
        msg = f"Configuration file not found: {path}"
        raise ConfigError(msg)

    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        msg = f"Cannot read configuration file {path}: {exc}"
        raise ConfigError(msg) from exc

    try:
        config = RamanMixConfig.model_validate(data)
    except ValidationError as exc:
        msg = f"Invalid configuration in {path}:\n{exc}"
        raise ConfigError(msg) from exc

    if config.basis is not None and not config.basis.is_absolute():
        config = config.model_copy(update={"basis": path.parent / config.basis})
    return config


def save_config(config: RamanMixConfig, path: Path) -> None:
    """Save configuration to a TOML file.

    Args:
        config: Configuration object to save.
        path: Path where to save the TOML file.
    """
    data = config.model_dump(mode="json", exclude_none=True)

    # Convert Path objects to strings
    def convert_paths(obj: object) -> object:
        if isinstance(obj, dict):
            return {k: convert_paths(v) for k, v in obj.items()}
        if isinstance(obj, list | tuple):
            return [convert_paths(v) for v in obj]
        if isinstance(obj, Path):
            return str(obj)
        return obj

    data = convert_paths(data)

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("wb") as f:
        tomli_w.dump(data, f)


def generate_default_config() -> str:
    """Generate a default configuration file as a string.

    Returns:
        str: TOML-formatted default configuration.
    """
    return """# ramanmix configuration file
# Generated automatically - edit as needed

# Component basis (TOML/JSON). Leave commented to use the packaged
# PVC / carbonate / DOTP / fluorescence basis.
# basis = "basis.toml"

[fitting]
window = [600.0, 1150.0]  # fitting domain in cm-1
max_iterations = 1000
tolerance = 1e-10         # relative sum-of-squares reduction
method = "lm"             # lm, trf
guess_window = 5.0        # half width around the reference band for initial heights

[background]
mode = "piecewise"        # piecewise, flat, linear
corner = 900.0
# upper = 1250.0          # far-end reference (PVC blend workflow); defaults to the fitting upper bound
corner_window = 200.0
margin = 5.0
min_points = 1
vary = []                 # subset of ["intercept", "slope", "corner"]

[output]
directory = "results"
ledger = "acombinedresults.txt"
save_curves = true
headless = false
# log_file = "ramanmix.log"
"""
