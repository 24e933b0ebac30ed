"""Test spectrum table loading and normalization."""

import pytest

import numpy as np

from ramanmix.core.domain.spectrum import SpectrumTable, sample_name
from ramanmix.core.shared.exceptions import DataIOError, InputFormatError


class TestSampleName:
    """Tests for sample identifiers."""

    def test_stem(self, tmp_path):
        """Identifier is the file name without directory and suffix."""
        assert sample_name(tmp_path / "sub" / "sample_a.txt") == "sample_a"


class TestFromArrays:
    """Tests for SpectrumTable.from_arrays."""

    def test_ascending_kept(self):
        """Ascending input is stored as is."""
        table = SpectrumTable.from_arrays([1.0, 2.0, 3.0], [4.0, 5.0, 6.0], name="s")
        np.testing.assert_array_equal(table.x, [1.0, 2.0, 3.0])
        np.testing.assert_array_equal(table.y, [4.0, 5.0, 6.0])
        assert table.name == "s"
        assert len(table) == 3

    def test_descending_sorted(self):
        """Descending input is normalized to ascending order with y following x."""
        table = SpectrumTable.from_arrays([3.0, 2.0, 1.0], [6.0, 5.0, 4.0])
        np.testing.assert_array_equal(table.x, [1.0, 2.0, 3.0])
        np.testing.assert_array_equal(table.y, [4.0, 5.0, 6.0])

    def test_read_only(self):
        """Arrays cannot be modified in place."""
        table = SpectrumTable.from_arrays([1.0, 2.0], [3.0, 4.0])
        with pytest.raises(ValueError):
            table.y[0] = 10.0

    def test_empty_raises(self):
        """Empty arrays are rejected."""
        with pytest.raises(InputFormatError, match="empty"):
            SpectrumTable.from_arrays([], [])

    def test_length_mismatch_raises(self):
        """Unequal lengths are rejected."""
        with pytest.raises(InputFormatError):
            SpectrumTable.from_arrays([1.0, 2.0], [1.0])

    def test_non_finite_raises(self):
        """NaN and inf are rejected."""
        with pytest.raises(InputFormatError, match="non-finite"):
            SpectrumTable.from_arrays([1.0, 2.0], [1.0, np.nan])


class TestReadWrite:
    """Tests for the two-column text format."""

    def test_round_trip_exact(self, tmp_path):
        """Writing then reading restores the pairs exactly."""
        rng = np.random.default_rng(0)
        x = np.sort(rng.uniform(100.0, 3000.0, 200))
        y = rng.normal(1000.0, 250.0, 200)
        original = SpectrumTable.from_arrays(x, y)

        path = original.write(tmp_path / "round.txt")
        restored = SpectrumTable.read(path)

        np.testing.assert_array_equal(restored.x, original.x)
        np.testing.assert_array_equal(restored.y, original.y)
        assert restored.name == "round"

    def test_round_trip_of_descending_file(self, tmp_path):
        """A descending file reads back in ascending order."""
        path = tmp_path / "desc.txt"
        path.write_text("3 30\n2 20\n1 10\n")
        table = SpectrumTable.read(path)
        np.testing.assert_array_equal(table.x, [1.0, 2.0, 3.0])
        np.testing.assert_array_equal(table.y, [10.0, 20.0, 30.0])

    def test_comments_and_extra_columns(self, tmp_path):
        """Comment lines and columns beyond the second are ignored."""
        path = tmp_path / "extra.txt"
        path.write_text("# wavenumber intensity error\n100 1 0.1\n200 2 0.2\n")
        table = SpectrumTable.read(path)
        np.testing.assert_array_equal(table.y, [1.0, 2.0])

    def test_missing_file(self, tmp_path):
        """A missing file is an input format error."""
        with pytest.raises(InputFormatError, match="not found"):
            SpectrumTable.read(tmp_path / "nope.txt")

    def test_empty_file(self, tmp_path):
        """A file without data is rejected."""
        path = tmp_path / "empty.txt"
        path.write_text("# nothing here\n")
        with pytest.raises(InputFormatError):
            SpectrumTable.read(path)

    def test_single_column(self, tmp_path):
        """One column is not a spectrum."""
        path = tmp_path / "one.txt"
        path.write_text("1\n2\n3\n")
        with pytest.raises(InputFormatError, match="two columns"):
            SpectrumTable.read(path)

    def test_non_numeric(self, tmp_path):
        """Non-numeric content is rejected."""
        path = tmp_path / "text.txt"
        path.write_text("100,5\n200,6\n")
        with pytest.raises(InputFormatError):
            SpectrumTable.read(path)

    def test_input_error_is_data_io_error(self):
        """Input format errors belong to the data I/O family."""
        assert issubclass(InputFormatError, DataIOError)


class TestWindow:
    """Tests for windowing and helpers."""

    def test_window_inclusive(self):
        """Both bounds are included."""
        table = SpectrumTable.from_arrays(np.arange(10.0), np.arange(10.0) * 2)
        sub = table.window(2.0, 5.0)
        np.testing.assert_array_equal(sub.x, [2.0, 3.0, 4.0, 5.0])
        np.testing.assert_array_equal(sub.y, [4.0, 6.0, 8.0, 10.0])

    def test_window_may_be_empty(self):
        """A window outside the range holds no samples."""
        table = SpectrumTable.from_arrays([1.0, 2.0], [1.0, 2.0])
        assert len(table.window(5.0, 6.0)) == 0

    def test_minimum_and_range(self):
        """Minimum intensity and first/last wavenumber."""
        table = SpectrumTable.from_arrays([3.0, 1.0, 2.0], [7.0, -1.0, 4.0])
        assert table.minimum() == -1.0
        assert table.x_range == (1.0, 3.0)
