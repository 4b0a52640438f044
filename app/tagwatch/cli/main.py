"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.logging import RichHandler

from tagwatch import __version__
from tagwatch.cli.commands import config, image, notif
from tagwatch.utils.formatting import err_console

# Create main Typer app
app = typer.Typer(
    name="tagwatch",
    help="Manage a tagwatch server and its notifications.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"tagwatch version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route log records to stderr through Rich.

    Args:
        verbose: Log at DEBUG level instead of WARNING.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )
    # httpx/httpcore are chatty at DEBUG
    logging.getLogger("httpcore").setLevel(logging.WARNING)


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            envvar="TAGWATCH_CONFIG",
            help="Path to the config file (default: ~/.config/tagwatch/config.toml).",
            dir_okay=False,
        ),
    ] = None,
) -> None:
    """tagwatch - Manage a tagwatch server and its notifications.

    Inspect and clean the image manifest database of a running server,
    and test the configured notifiers.
    """
    configure_logging(verbose)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config_path


# Register commands
app.add_typer(image.app, name="image")
app.add_typer(notif.app, name="notif")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
