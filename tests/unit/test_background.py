"""Test baseline models and their estimation."""

import pytest

import numpy as np

from ramanmix.core.domain.background import (
    LinearBackground,
    PiecewiseBackground,
    estimate_background,
    estimate_flat,
    estimate_linear,
    estimate_piecewise,
)
from ramanmix.core.domain.config import BackgroundConfig
from ramanmix.core.domain.spectrum import SpectrumTable
from ramanmix.core.shared.exceptions import BackgroundWindowError, ConfigError


@pytest.fixture
def dog_leg_spectrum():
    """Flat at 10 up to 900 cm-1, rising 0.1 per cm-1 above, 1 cm-1 spacing."""
    x = np.arange(400.0, 1401.0)
    y = np.where(x > 900.0, 10.0 + 0.1 * (x - 900.0), 10.0)
    return SpectrumTable.from_arrays(x, y, name="dogleg")


class TestModels:
    """Tests for baseline evaluation."""

    def test_linear(self):
        """Linear baseline is intercept + slope * x."""
        bg = LinearBackground(slope=2.0, intercept=1.0)
        np.testing.assert_allclose(bg.evaluate(np.array([0.0, 1.0, 3.0])), [1.0, 3.0, 7.0])

    def test_piecewise(self):
        """Flat up to and including the corner, linear above."""
        bg = PiecewiseBackground(slope=0.5, intercept=2.0, corner=10.0)
        values = bg.evaluate(np.array([0.0, 10.0, 12.0]))
        np.testing.assert_allclose(values, [2.0, 2.0, 3.0])

    def test_as_dict(self):
        """Parameter names map to values."""
        bg = PiecewiseBackground(slope=0.5, intercept=2.0, corner=10.0)
        assert bg.as_dict() == {"intercept": 2.0, "slope": 0.5, "corner": 10.0}
        assert LinearBackground(0.0, 3.0).as_dict() == {"intercept": 3.0, "slope": 0.0}


class TestEstimators:
    """Tests for the background estimators."""

    def test_piecewise_window_minima(self, dog_leg_spectrum):
        """Intercept from the corner window, slope through the far-end minimum."""
        bg = estimate_piecewise(dog_leg_spectrum, corner=900.0, upper=1150.0)
        assert bg.intercept == pytest.approx(10.0)
        assert bg.corner == 900.0
        # Far-end window (1145, 1155) has its minimum at x = 1146
        far_end = 10.0 + 0.1 * 246.0
        assert bg.slope == pytest.approx((far_end - 10.0) / 250.0)

    def test_piecewise_ignores_downward_mean_bias(self):
        """The window minimum is used, not the mean."""
        x = np.arange(600.0, 1200.0)
        y = np.full_like(x, 50.0)
        y[(x > 800.0) & (x < 900.0)] = 80.0
        y[x == 850.0] = 45.0
        table = SpectrumTable.from_arrays(x, y)
        bg = estimate_piecewise(table, corner=900.0, upper=1150.0)
        assert bg.intercept == 45.0

    def test_piecewise_empty_window_raises(self, dog_leg_spectrum):
        """A corner window without samples is a configuration error."""
        table = dog_leg_spectrum.window(1000.0, 1400.0)
        with pytest.raises(BackgroundWindowError, match="Corner window"):
            estimate_piecewise(table, corner=900.0, upper=1150.0)

    def test_piecewise_min_points(self, dog_leg_spectrum):
        """Windows must hold at least ``min_points`` samples."""
        with pytest.raises(BackgroundWindowError, match="Far-end window"):
            estimate_piecewise(dog_leg_spectrum, corner=900.0, upper=1150.0, min_points=20)

    def test_piecewise_upper_below_corner(self, dog_leg_spectrum):
        """The far end must lie above the corner."""
        with pytest.raises(BackgroundWindowError):
            estimate_piecewise(dog_leg_spectrum, corner=900.0, upper=900.0)

    def test_window_error_is_config_error(self):
        """Background window errors are configuration errors."""
        assert issubclass(BackgroundWindowError, ConfigError)

    def test_flat(self, dog_leg_spectrum):
        """Flat baseline sits at the global minimum."""
        bg = estimate_flat(dog_leg_spectrum)
        assert bg == LinearBackground(slope=0.0, intercept=10.0)

    def test_linear_through_endpoints(self):
        """Linear baseline passes through the first and last samples."""
        table = SpectrumTable.from_arrays([100.0, 150.0, 200.0], [3.0, 100.0, 5.0])
        bg = estimate_linear(table)
        np.testing.assert_allclose(bg.evaluate(np.array([100.0, 200.0])), [3.0, 5.0])

    def test_linear_single_sample_raises(self):
        """A single sample does not define a line."""
        table = SpectrumTable.from_arrays([100.0], [3.0])
        with pytest.raises(BackgroundWindowError):
            estimate_linear(table)


class TestDispatch:
    """Tests for configuration-selected estimation."""

    def test_modes(self, dog_leg_spectrum):
        """Each mode selects its estimator."""
        piecewise = estimate_background(dog_leg_spectrum, BackgroundConfig(), upper=1150.0)
        assert isinstance(piecewise, PiecewiseBackground)

        flat = estimate_background(dog_leg_spectrum, BackgroundConfig(mode="flat"), upper=1150.0)
        assert flat.slope == 0.0

        linear = estimate_background(
            dog_leg_spectrum, BackgroundConfig(mode="linear"), upper=1150.0
        )
        assert isinstance(linear, LinearBackground)
        assert linear.slope == pytest.approx(50.0 / 1000.0)

    def test_custom_windows(self, dog_leg_spectrum):
        """Corner window and margin come from the configuration."""
        config = BackgroundConfig(corner=1000.0, corner_window=50.0, margin=2.0)
        bg = estimate_background(dog_leg_spectrum, config, upper=1200.0)
        # Corner window (950, 1002): minimum at x = 951
        assert bg.intercept == pytest.approx(10.0 + 0.1 * 51.0)
        assert bg.corner == 1000.0
