"""Utility modules for tagwatch.

This module exports commonly used utility functions.
"""

from tagwatch.utils.formatting import (
    console,
    err_console,
    format_timestamp,
    human_size,
    print_error,
    print_info,
    print_success,
    print_warning,
)

__all__ = [
    "console",
    "err_console",
    "format_timestamp",
    "human_size",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
