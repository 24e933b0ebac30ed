"""UI and terminal output styling for ramanmix.

Submodules:
- console: Theme and console instance
- logging: File logging utilities
- messages: Status messages (success, error, warning, etc.)
- tables: Table display utilities
- progress: Progress bar utilities
- reporter: Reporter implementation on top of the console
"""

from ramanmix.ui.console import (
    RAMANMIX_THEME,
    VERSION,
    Verbosity,
    console,
    icon,
    set_verbosity,
)
from ramanmix.ui.logging import close_logging, log, log_dict, log_section, setup_logging
from ramanmix.ui.messages import (
    action,
    bullet,
    error,
    info,
    show_error_with_details,
    show_footer,
    show_header,
    success,
    warning,
)
from ramanmix.ui.progress import batch_progress
from ramanmix.ui.reporter import ConsoleReporter
from ramanmix.ui.tables import create_table, print_batch_table, print_summary

__all__ = [
    "RAMANMIX_THEME",
    "VERSION",
    "ConsoleReporter",
    "Verbosity",
    "action",
    "batch_progress",
    "bullet",
    "close_logging",
    "console",
    "create_table",
    "error",
    "icon",
    "info",
    "log",
    "log_dict",
    "log_section",
    "print_batch_table",
    "print_summary",
    "set_verbosity",
    "setup_logging",
    "show_error_with_details",
    "show_footer",
    "show_header",
    "success",
    "warning",
]
