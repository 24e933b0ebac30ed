"""Console configuration and theme for the ramanmix UI.

This module provides the central console instance and theme used throughout
the application for consistent styling.
"""

import os
import sys

from rich.console import Console
from rich.theme import Theme

from ramanmix import __version__

# Palette chosen for good contrast in light/dark terminals
RAMANMIX_THEME = Theme(
    {
        # --- Semantic Status ---
        "success": "bold green",
        "warning": "bold yellow",
        "error": "bold red",
        "info": "cyan",
        "neutral": "dim white",
        # --- UI Structure ---
        "header": "bold cyan",
        "subheader": "bold white",
        # --- Data & Values ---
        "key": "cyan",
        "value": "green",
        "metric": "bold green",
        "path": "blue underline",
        # --- Progress ---
        "progress.description": "bold white",
        "progress.percentage": "green",
        # --- Modifiers ---
        "dim": "dim",
        "emphasis": "bold",
    }
)

# Single console instance for entire application
console = Console(theme=RAMANMIX_THEME)

VERSION = __version__

__all__ = [
    "RAMANMIX_THEME",
    "VERSION",
    "Verbosity",
    "console",
    "icon",
    "set_verbosity",
]


class Verbosity:
    """Verbosity levels for UI output."""

    QUIET = 0  # Errors only
    NORMAL = 1  # Standard output (headers, progress, results)
    VERBOSE = 2  # Detailed output (debug info)


def set_verbosity(level: int) -> None:
    """Set the console verbosity level; quiet silences all but errors.

    Args:
        level: Verbosity level (0=QUIET, 1=NORMAL, 2=VERBOSE)
    """
    console.quiet = level == Verbosity.QUIET


_EMOJI_DISABLED = os.getenv("RAMANMIX_NO_EMOJI", "").lower() in {"1", "true", "yes"}


def _supports_emoji() -> bool:
    """Best-effort detection if the terminal supports Unicode symbols."""
    if _EMOJI_DISABLED:
        return False
    enc = getattr(console, "encoding", None) or sys.getdefaultencoding()
    return enc is None or "utf" in enc.lower()


def icon(name: str) -> str:
    """Return a UI icon string based on terminal capabilities.

    Names: check, warn, error, info, bullet, skip, separator
    """
    use_unicode = _supports_emoji()
    mapping = {
        "check": "✓" if use_unicode else "+",
        "warn": "⚠" if use_unicode else "!",
        "error": "✗" if use_unicode else "x",
        "info": "▸" if use_unicode else ">",
        "bullet": "‣" if use_unicode else "-",
        "skip": "↷" if use_unicode else "~",
        "separator": "━" if use_unicode else "-",
    }
    return mapping.get(name, mapping["bullet"])
