"""Shared types and utilities for CLI commands.

This module provides helpers used across multiple CLI command modules
to load the configuration and resolve the server address.
"""

from pathlib import Path
from typing import Annotated

import typer

from tagwatch.core.config import ConfigError, load_config_or_default
from tagwatch.models.config import Config
from tagwatch.utils.formatting import print_error

GrpcAuthorityOption = Annotated[
    str | None,
    typer.Option(
        "--grpc-authority",
        envvar="TAGWATCH_GRPC_AUTHORITY",
        help="Address of the tagwatch gRPC server (default: 127.0.0.1:42286).",
        show_default=False,
    ),
]


def get_config(ctx: typer.Context) -> Config:
    """Load the configuration selected by the global --config option.

    A missing file yields the default configuration.

    Args:
        ctx: Typer context carrying the global options.

    Returns:
        Loaded Config.

    Raises:
        typer.Exit: If the config file is invalid.
    """
    obj = ctx.obj or {}
    config_path: Path | None = obj.get("config_path")
    try:
        return load_config_or_default(config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def resolve_authority(ctx: typer.Context, grpc_authority: str | None) -> str:
    """Resolve the server address.

    Priority: --grpc-authority / TAGWATCH_GRPC_AUTHORITY, then the config
    file, then the built-in default.

    Args:
        ctx: Typer context carrying the global options.
        grpc_authority: Value of the --grpc-authority option.

    Returns:
        Server address (host:port).
    """
    if grpc_authority:
        return grpc_authority
    return get_config(ctx).client.grpc_authority
