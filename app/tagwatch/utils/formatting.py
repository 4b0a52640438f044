"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import sys
from datetime import UTC, datetime

from rich.console import Console
from rich.markup import escape

from tagwatch.core.theme import get_theme

# Decimal (SI) units, as used by container tooling for image sizes
_SIZE_UNITS = ("B", "kB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB")


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def human_size(size: float) -> str:
    """Format a byte count as a human-readable decimal size.

    Uses four significant digits and SI units, e.g. ``0B``, ``1.5kB``,
    ``123.5MB``.

    Args:
        size: Size in bytes.

    Returns:
        Human-readable size string.
    """
    value = float(size)
    index = 0
    while value >= 1000 and index < len(_SIZE_UNITS) - 1:
        value /= 1000
        index += 1
    return f"{value:.4g}{_SIZE_UNITS[index]}"


def format_timestamp(value: datetime) -> str:
    """Format a timestamp as RFC 3339 in UTC.

    Naive datetimes are assumed to be UTC already.

    Args:
        value: Timestamp to format.

    Returns:
        Timestamp string such as ``2024-01-02T03:04:05Z``.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
