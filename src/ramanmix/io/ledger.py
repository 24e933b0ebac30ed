"""Persistent ledger of fitted samples and their material heights.

The ledger is a whitespace-separated text table::

    name pvc_height carbonate_height dotp_height fluorescence_height
    sample_a 3.141 0.52 12.7 98.1

It is append-only in normal operation and rewritten to its header line on an
explicit reset.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ramanmix.core.fitting.parameters import height_name
from ramanmix.core.shared.exceptions import LedgerIOError

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from pathlib import Path

NAME_COLUMN = "name"


def valid_identifier(name: str) -> bool:
    """Return True if ``name`` fits in the whitespace-separated name column."""
    return bool(name) and not any(ch.isspace() for ch in name)


class LedgerRepository:
    """Injected access point to the results ledger of one batch run."""

    def __init__(self, path: Path, materials: Sequence[str]) -> None:
        """Initialize the repository.

        Args:
            path: Ledger file location
            materials: Material names in column order
        """
        self.path = path
        self.materials = list(materials)

    @property
    def header(self) -> list[str]:
        """Expected header columns."""
        return [NAME_COLUMN, *(height_name(material) for material in self.materials)]

    def ensure(self) -> None:
        """Create a header-only ledger if absent, otherwise check its header.

        Raises
        ------
            LedgerIOError: If the file cannot be created or read, or its header
                does not match the configured materials
        """
        if not self.path.exists():
            self._write_header()
            return
        lines = self._read_lines()
        if not lines:
            self._write_header()
            return
        found = lines[0].split()
        if found != self.header:
            msg = (
                f"Ledger {self.path} has columns {' '.join(found)}, "
                f"expected {' '.join(self.header)}"
            )
            raise LedgerIOError(msg)

    def names(self) -> list[str]:
        """Return the recorded sample identifiers in file order."""
        return [row[0] for row in self._rows()]

    def contains(self, name: str) -> bool:
        """Return True if ``name`` has a row (exact match on the name column)."""
        return any(row[0] == name for row in self._rows())

    def entries(self) -> dict[str, dict[str, float]]:
        """Return ``{sample: {material: height}}``; later rows win on duplicates."""
        entries: dict[str, dict[str, float]] = {}
        for row in self._rows():
            values = row[1:]
            if len(values) != len(self.materials):
                msg = f"Malformed ledger row in {self.path}: {' '.join(row)}"
                raise LedgerIOError(msg)
            try:
                entries[row[0]] = {
                    material: float(value)
                    for material, value in zip(self.materials, values, strict=True)
                }
            except ValueError as exc:
                msg = f"Malformed ledger row in {self.path}: {' '.join(row)}"
                raise LedgerIOError(msg) from exc
        return entries

    def append(self, name: str, heights: Mapping[str, float]) -> None:
        """Append one row for ``name``.

        Raises
        ------
            LedgerIOError: If a material height is missing or the file cannot
                be written
        """
        if not valid_identifier(name):
            msg = f"Sample identifier {name!r} cannot be stored in the ledger"
            raise LedgerIOError(msg)
        try:
            values = [f"{float(heights[material]):.10g}" for material in self.materials]
        except KeyError as exc:
            msg = f"No height for material {exc.args[0]!r} of sample {name}"
            raise LedgerIOError(msg) from exc

        self.ensure()
        line = " ".join([name, *values])
        try:
            with self.path.open("a", encoding="utf-8") as fh:
                fh.write(line + "\n")
        except OSError as exc:
            msg = f"Cannot append to ledger {self.path}: {exc}"
            raise LedgerIOError(msg) from exc

    def reset(self) -> None:
        """Discard all rows, leaving only the header."""
        self._write_header()

    def __len__(self) -> int:
        """Return the number of recorded rows."""
        return len(self._rows())

    def __repr__(self) -> str:
        """Return a string representation of the repository."""
        return f"<LedgerRepository {self.path} materials={self.materials}>"

    def _rows(self) -> list[list[str]]:
        if not self.path.exists():
            return []
        lines = self._read_lines()
        return [line.split() for line in lines[1:] if line.strip()]

    def _read_lines(self) -> list[str]:
        try:
            return self.path.read_text(encoding="utf-8").splitlines()
        except (OSError, UnicodeDecodeError) as exc:
            msg = f"Cannot read ledger {self.path}: {exc}"
            raise LedgerIOError(msg) from exc

    def _write_header(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(" ".join(self.header) + "\n", encoding="utf-8")
        except OSError as exc:
            msg = f"Cannot write ledger {self.path}: {exc}"
            raise LedgerIOError(msg) from exc


__all__ = ["NAME_COLUMN", "LedgerRepository", "valid_identifier"]
