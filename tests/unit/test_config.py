"""Test configuration models and TOML files."""

import tomllib
from pathlib import Path

import pytest
from pydantic import ValidationError

from ramanmix.core.domain.config import (
    BackgroundConfig,
    FitConfig,
    OutputConfig,
    RamanMixConfig,
)
from ramanmix.core.shared.exceptions import ConfigError
from ramanmix.io.config import generate_default_config, load_config, save_config


class TestModels:
    """Tests for configuration models."""

    def test_defaults(self):
        """Defaults reproduce the standard PVC blend fit."""
        config = RamanMixConfig()
        assert config.basis is None
        assert config.fitting.window == (600.0, 1150.0)
        assert config.fitting.max_iterations == 1000
        assert config.fitting.tolerance == 1e-10
        assert config.fitting.method == "lm"
        assert config.background.mode == "piecewise"
        assert config.background.corner == 900.0
        assert config.far_end == 1150.0
        assert config.output.ledger == Path("acombinedresults.txt")

    def test_far_end_override(self):
        """An explicit upper reference replaces the window bound."""
        config = RamanMixConfig(background=BackgroundConfig(upper=1250.0))
        assert config.far_end == 1250.0

    def test_window_must_increase(self):
        """The fitting window bounds must be ordered."""
        with pytest.raises(ValidationError, match="lower bound"):
            FitConfig(window=(1150.0, 600.0))

    @pytest.mark.parametrize("tolerance", [0.0, -1e-8, 1.0])
    def test_tolerance_range(self, tolerance):
        """Tolerance is a small positive fraction."""
        with pytest.raises(ValidationError):
            FitConfig(tolerance=tolerance)

    def test_far_end_above_corner(self):
        """Piecewise mode needs the far end above the corner."""
        with pytest.raises(ValidationError, match="corner"):
            RamanMixConfig(fitting=FitConfig(window=(600.0, 850.0)))

    def test_flat_mode_ignores_corner(self):
        """Corner placement only matters in piecewise mode."""
        config = RamanMixConfig(
            fitting=FitConfig(window=(600.0, 850.0)),
            background=BackgroundConfig(mode="flat"),
        )
        assert config.background.mode == "flat"

    def test_vary_deduplicated(self):
        """Repeated free background parameters collapse."""
        config = BackgroundConfig(vary=["intercept", "slope", "intercept"])
        assert config.vary == ["intercept", "slope"]

    def test_unknown_keys_rejected(self):
        """Typos in option names are errors."""
        with pytest.raises(ValidationError):
            OutputConfig.model_validate({"directroy": "out"})


class TestFiles:
    """Tests for loading and saving configuration files."""

    def test_load(self, config_file, basis_file):
        """Values come from the file; the basis resolves next to it."""
        config = load_config(config_file)
        assert config.fitting.window == (400.0, 1400.0)
        assert config.background.mode == "flat"
        assert config.background.vary == ["intercept"]
        assert config.output.headless is True
        assert config.basis == basis_file

    def test_missing_file(self, tmp_path):
        """A missing file is a configuration error."""
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "none.toml")

    def test_invalid_toml(self, tmp_path):
        """Broken TOML is a configuration error."""
        path = tmp_path / "bad.toml"
        path.write_text("[fitting\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_invalid_values(self, tmp_path):
        """Schema violations are configuration errors."""
        path = tmp_path / "bad.toml"
        path.write_text('[background]\nmode = "cubic"\n')
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_config(path)

    def test_save_and_reload(self, tmp_path):
        """Saved configurations load back unchanged."""
        config = RamanMixConfig(
            fitting=FitConfig(window=(500.0, 1200.0), method="trf"),
            background=BackgroundConfig(upper=1180.0, vary=["intercept"]),
            output=OutputConfig(directory=tmp_path / "out"),
        )
        path = tmp_path / "saved.toml"
        save_config(config, path)
        assert load_config(path) == config

    def test_default_config_is_valid(self):
        """The generated template validates to the defaults."""
        data = tomllib.loads(generate_default_config())
        assert RamanMixConfig.model_validate(data) == RamanMixConfig()

    def test_default_config_far_end(self):
        """Uncommenting the far-end reference moves it past the window."""
        text = generate_default_config().replace("# upper = 1250.0", "upper = 1250.0")
        config = RamanMixConfig.model_validate(tomllib.loads(text))
        assert config.background.upper == 1250.0
        assert config.far_end == 1250.0
        assert config.fitting.window == (600.0, 1150.0)
