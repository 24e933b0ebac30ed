"""Pytest fixtures for ramanmix tests."""

import pytest

import numpy as np

from ramanmix.core.domain.basis import BasisSet, ComponentBasis, SubPeak
from ramanmix.core.domain.config import (
    BackgroundConfig,
    FitConfig,
    OutputConfig,
    RamanMixConfig,
)
from ramanmix.core.lineshapes.functions import sum_of_peaks
from ramanmix.ui.console import Verbosity, set_verbosity

M1_PEAKS = [(700.0, 1.0, 15.0), (1000.0, 0.5, 20.0)]
M2_PEAKS = [(1200.0, 1.0, 20.0)]


def make_material(name, peaks, **kwargs):
    """Build a ComponentBasis from ``(location, scale, width)`` triples."""
    return ComponentBasis(
        name=name,
        peaks=tuple(SubPeak(location=loc, scale=scale, width=width) for loc, scale, width in peaks),
        **kwargs,
    )


def write_xy(path, x, y):
    """Write a two-column spectrum file."""
    np.savetxt(path, np.column_stack((x, y)), fmt="%.17g")
    return path


@pytest.fixture(autouse=True)
def reset_verbosity():
    """Restore normal console verbosity after each test."""
    yield
    set_verbosity(Verbosity.NORMAL)


@pytest.fixture
def single_basis():
    """One material with a single sub-peak at 800 cm-1."""
    return BasisSet(materials=(make_material("pvc", [(800.0, 1.0, 10.0)]),))


@pytest.fixture
def two_material_basis():
    """Materials m1 (two sub-peaks) and m2 (one sub-peak)."""
    return BasisSet(
        materials=(make_material("m1", M1_PEAKS), make_material("m2", M2_PEAKS)),
    )


@pytest.fixture
def single_material_spectrum():
    """Noise-free pvc spectrum: height 10 on a flat background of 5."""
    x = np.linspace(600.0, 1000.0, 401)
    y = 5.0 + 10.0 * sum_of_peaks(x, [(800.0, 1.0, 10.0)])
    return x, y


@pytest.fixture
def mixture_xy():
    """50-point spectrum over 400-1400 cm-1: m1 height 3, m2 height 1, flat 5."""
    x = np.linspace(400.0, 1400.0, 50)
    y = 5.0 + 3.0 * sum_of_peaks(x, M1_PEAKS) + 1.0 * sum_of_peaks(x, M2_PEAKS)
    return x, y


@pytest.fixture
def mixture_file(tmp_path, mixture_xy):
    """The two-material mixture written as ``sample_a.txt``."""
    x, y = mixture_xy
    return write_xy(tmp_path / "sample_a.txt", x, y)


@pytest.fixture
def basis_file(tmp_path):
    """TOML basis file describing m1 and m2."""
    path = tmp_path / "basis.toml"
    lines = []
    for name, peaks in (("m1", M1_PEAKS), ("m2", M2_PEAKS)):
        lines.append("[[materials]]")
        lines.append(f'name = "{name}"')
        lines.append("peaks = [")
        lines.extend(
            f"  {{ location = {loc}, scale = {scale}, width = {width} }},"
            for loc, scale, width in peaks
        )
        lines.append("]")
        lines.append("")
    path.write_text("\n".join(lines))
    return path


@pytest.fixture
def batch_config(tmp_path):
    """Configuration fitting the whole 400-1400 range on a flat background."""
    return RamanMixConfig(
        fitting=FitConfig(window=(400.0, 1400.0)),
        background=BackgroundConfig(mode="flat", vary=["intercept"]),
        output=OutputConfig(
            directory=tmp_path / "results",
            ledger=tmp_path / "acombinedresults.txt",
        ),
    )


@pytest.fixture
def config_file(tmp_path, basis_file):
    """TOML configuration equivalent to ``batch_config`` with an explicit basis."""
    path = tmp_path / "ramanmix.toml"
    path.write_text(
        f"""
basis = "{basis_file.name}"

[fitting]
window = [400.0, 1400.0]

[background]
mode = "flat"
vary = ["intercept"]

[output]
directory = "{(tmp_path / "results").as_posix()}"
ledger = "{(tmp_path / "acombinedresults.txt").as_posix()}"
headless = true
"""
    )
    return path
