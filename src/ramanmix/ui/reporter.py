"""Console-based reporter implementation using Rich.

This module provides a Reporter implementation that uses the ramanmix UI
styling for rich console output.
"""

from __future__ import annotations

from rich.markup import escape

from ramanmix.core.shared.reporter import Reporter
from ramanmix.ui.messages import action, error, info, success, warning


class ConsoleReporter:
    """Reporter implementation using Rich console output.

    Messages are escaped so sample names and paths containing square
    brackets are printed verbatim.

    Example:
        >>> from ramanmix.ui.reporter import ConsoleReporter
        >>> reporter = ConsoleReporter()
        >>> reporter.action("Fitting sample_a...")
        >>> reporter.success("sample_a recorded")
    """

    def action(self, message: str) -> None:
        """Display an action message."""
        action(escape(message))

    def info(self, message: str) -> None:
        """Display an informational message."""
        info(escape(message))

    def warning(self, message: str) -> None:
        """Display a warning message."""
        warning(escape(message))

    def error(self, message: str) -> None:
        """Display an error message."""
        error(escape(message))

    def success(self, message: str) -> None:
        """Display a success message."""
        success(escape(message))


# Verify protocol compliance at import time
if not isinstance(ConsoleReporter(), Reporter):
    raise TypeError("ConsoleReporter must satisfy Reporter protocol")
