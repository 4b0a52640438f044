"""Configuration commands.

Provides commands to create the client config file and to display the
effective configuration.
"""

from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.table import Table

from tagwatch.cli.types import get_config
from tagwatch.core.config import ConfigError, config_to_dict, save_config
from tagwatch.core.paths import get_config_path
from tagwatch.models.config import (
    DEFAULT_GRPC_AUTHORITY,
    ClientConfig,
    Config,
    NotifConfig,
    WebhookConfig,
)
from tagwatch.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Create and display the client configuration.",
    no_args_is_help=True,
)


def _target_path(ctx: typer.Context) -> Path:
    """Config file selected by --config, or the default location."""
    obj = ctx.obj or {}
    return obj.get("config_path") or get_config_path()


@app.command("init")
def init_config(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite an existing config file.",
        ),
    ] = False,
    grpc_authority: Annotated[
        str | None,
        typer.Option(
            "--grpc-authority",
            help="Address of the tagwatch gRPC server.",
        ),
    ] = None,
    webhook_endpoint: Annotated[
        str | None,
        typer.Option(
            "--webhook-endpoint",
            help="Enable the webhook notifier with this endpoint.",
        ),
    ] = None,
) -> None:
    """Create a config file with default settings.

    Examples:
        tagwatch config init
        tagwatch config init --webhook-endpoint https://example.com/hook
        tagwatch config init --force
    """
    path = _target_path(ctx)
    if path.exists() and not force:
        print_error(f"Config already exists: {path}")
        print_info("Use --force to overwrite it.")
        raise typer.Exit(code=1)

    try:
        config = Config(
            client=ClientConfig(grpc_authority=grpc_authority or DEFAULT_GRPC_AUTHORITY),
            notif=NotifConfig(
                webhook=WebhookConfig(endpoint=webhook_endpoint) if webhook_endpoint else None
            ),
        )
    except ValidationError as e:
        print_error(f"Invalid value: {e}")
        raise typer.Exit(code=1) from e

    try:
        saved = save_config(config, path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved}")


@app.command("show")
def show_config(
    ctx: typer.Context,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
) -> None:
    """Show the effective configuration (defaults merged with the file)."""
    config = get_config(ctx)

    if json_output:
        console.print_json(data=config.model_dump(mode="json"))
        return

    table = Table(title="Configuration", header_style="bold_header", border_style="border")
    table.add_column("Key", style="muted", no_wrap=True)
    table.add_column("Value", overflow="fold")

    for section, values in config_to_dict(config).items():
        for key, value in _flatten(values):
            table.add_row(f"{section}.{key}", str(value))

    console.print(table)


def _flatten(values: dict[str, object], prefix: str = "") -> list[tuple[str, object]]:
    """Flatten nested config sections into dotted keys.

    Args:
        values: Section values, possibly nested.
        prefix: Key prefix for nested sections.

    Returns:
        List of (dotted key, value) pairs.
    """
    items: list[tuple[str, object]] = []
    for key, value in values.items():
        if isinstance(value, dict):
            items.extend(_flatten(value, f"{prefix}{key}."))
        else:
            items.append((f"{prefix}{key}", value))
    return items
