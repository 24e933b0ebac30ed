"""Spectrum table: ordered (wavenumber, intensity) samples of one measurement."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import numpy as np

from ramanmix.core.shared.exceptions import InputFormatError
from ramanmix.core.shared.typing import FloatArray


def sample_name(path: Path) -> str:
    """Derive the sample identifier from its source file name (``a/b.txt`` -> ``b``)."""
    return Path(path).stem


@dataclass(frozen=True, eq=False)
class SpectrumTable:
    """Ordered (x, y) samples with x ascending.

    Instances are created through :meth:`from_arrays` or :meth:`read`, which
    validate the data and normalize descending input to ascending order.
    """

    x: FloatArray
    y: FloatArray
    name: str = ""

    @classmethod
    def from_arrays(
        cls, x: FloatArray | list[float], y: FloatArray | list[float], name: str = ""
    ) -> SpectrumTable:
        """Build a validated table from wavenumber and intensity sequences.

        Raises
        ------
            InputFormatError: If the arrays are empty, of unequal length or
                contain non-finite values
        """
        x_arr = np.asarray(x, dtype=float).ravel()
        y_arr = np.asarray(y, dtype=float).ravel()

        if x_arr.size == 0:
            msg = f"Spectrum {name or '<unnamed>'} is empty"
            raise InputFormatError(msg)
        if x_arr.shape != y_arr.shape:
            msg = (
                f"Spectrum {name or '<unnamed>'}: {x_arr.size} wavenumbers "
                f"but {y_arr.size} intensities"
            )
            raise InputFormatError(msg)
        if not (np.all(np.isfinite(x_arr)) and np.all(np.isfinite(y_arr))):
            msg = f"Spectrum {name or '<unnamed>'} contains non-finite values"
            raise InputFormatError(msg)

        # Stable sort keeps the relative order of repeated wavenumbers
        order = np.argsort(x_arr, kind="stable")
        x_sorted = x_arr[order]
        y_sorted = y_arr[order]
        x_sorted.setflags(write=False)
        y_sorted.setflags(write=False)
        return cls(x=x_sorted, y=y_sorted, name=name)

    @classmethod
    def read(cls, path: Path) -> SpectrumTable:
        """Read a two-column (wavenumber intensity) whitespace-separated text file.

        Lines starting with ``#`` are ignored; extra columns are ignored.

        Raises
        ------
            InputFormatError: If the file is missing, unreadable or malformed
        """
        path = Path(path)
        name = sample_name(path)
        if not path.is_file():
            msg = f"Spectrum file not found: {path}"
            raise InputFormatError(msg)

        try:
            data = np.loadtxt(path, dtype=float, comments="#", ndmin=2)
        except (OSError, ValueError) as exc:
            msg = f"Cannot parse spectrum file {path}: {exc}"
            raise InputFormatError(msg) from exc

        if data.size == 0:
            msg = f"Spectrum file {path} contains no data"
            raise InputFormatError(msg)
        if data.shape[1] < 2:
            msg = f"Spectrum file {path} needs two columns, found {data.shape[1]}"
            raise InputFormatError(msg)

        return cls.from_arrays(data[:, 0], data[:, 1], name=name)

    def write(self, path: Path) -> Path:
        """Write the table as two-column text; :meth:`read` restores it exactly."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        np.savetxt(path, np.column_stack((self.x, self.y)), fmt="%.17g")
        return path

    def window(self, lo: float, hi: float) -> SpectrumTable:
        """Return the samples with ``lo <= x <= hi`` (may be empty)."""
        mask = (self.x >= lo) & (self.x <= hi)
        return SpectrumTable(x=self.x[mask], y=self.y[mask], name=self.name)

    def minimum(self) -> float:
        """Return the smallest intensity of the whole spectrum."""
        return float(np.min(self.y))

    @property
    def x_range(self) -> tuple[float, float]:
        """Return the (first, last) wavenumber."""
        return float(self.x[0]), float(self.x[-1])

    def __len__(self) -> int:
        """Return the number of samples."""
        return int(self.x.size)


__all__ = ["SpectrumTable", "sample_name"]
