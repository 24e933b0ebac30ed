"""Status reporting seam between the batch layer and the user interface.

Core and service code report through the :class:`Reporter` protocol and never
import the UI. The silent default lives here; the rich console one is
``ramanmix.ui.reporter.ConsoleReporter``.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Reporter(Protocol):
    """Receiver of per-sample status messages.

    Messages are plain strings; implementations decide on styling.
    """

    def action(self, message: str) -> None:
        """Report work starting on a sample (e.g. 'Fitting sample_a')."""
        ...

    def info(self, message: str) -> None:
        """Report an informational message, such as a skipped sample."""
        ...

    def warning(self, message: str) -> None:
        """Report a recorded sample whose fit did not converge."""
        ...

    def error(self, message: str) -> None:
        """Report a failed sample; the batch goes on."""
        ...

    def success(self, message: str) -> None:
        """Report a sample appended to the ledger."""
        ...


class NullReporter:
    """Reporter that discards every message (library and test default)."""

    def action(self, message: str) -> None:
        """Discard action message."""

    def info(self, message: str) -> None:
        """Discard info message."""

    def warning(self, message: str) -> None:
        """Discard warning message."""

    def error(self, message: str) -> None:
        """Discard error message."""

    def success(self, message: str) -> None:
        """Discard success message."""
