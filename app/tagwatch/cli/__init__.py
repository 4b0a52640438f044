"""CLI package for tagwatch.

This package contains the Typer application and all subcommands.
"""

from tagwatch.cli.main import app

__all__ = ["app"]
