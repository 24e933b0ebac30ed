"""Command-line interface for ramanmix."""

from ramanmix.cli.app import app

__all__ = ["app"]
