"""CLI command modules for ramanmix.

Each module exports a command function decorated with the necessary Typer
annotations; the main app.py imports and registers them.
"""

from ramanmix.cli.commands.fit import fit_command
from ramanmix.cli.commands.init import init_command

__all__ = [
    "fit_command",
    "init_command",
]
