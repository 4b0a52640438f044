"""CLI commands for tagwatch.

This package contains all subcommand implementations.
"""

from tagwatch.cli.commands import config, image, notif

__all__ = ["config", "image", "notif"]
