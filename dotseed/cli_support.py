"""Shared utilities for dotseed CLI modules."""
from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console

from dotseed.core.config import is_mock, load_settings
from dotseed.models.config import ConfigValidationError, Settings


def setup_file_logging(log_file: Optional[str] = None, verbose: bool = False) -> None:
    """Set up file logging for CLI commands.

    Args:
        log_file: Path to log file (optional)
        verbose: Enable verbose logging
    """
    from dotseed.core.logger import setup_file_logging as _setup_file_logging
    _setup_file_logging(log_file=log_file, verbose=verbose)


def load_settings_or_exit(config_path: Optional[str], console: Console) -> Settings:
    """Load settings, turning validation errors into a clean exit."""
    try:
        return load_settings(config_path)
    except ConfigValidationError as e:
        handle_cli_error(e, console)


def handle_cli_error(
    e: Exception,
    console: Console,
    verbose: bool = False,
    exit_code: int = 1
) -> None:
    """Report e on the console and leave the command with exit_code.

    The traceback is only shown when verbose is set.
    """
    print_error(console, str(e))
    if verbose:
        console.print_exception()
    raise typer.Exit(exit_code)


STATUS_MARKS = {
    "success": ("green", "✓"),
    "error": ("red", "✗"),
    "warning": ("yellow", "⚠"),
    "info": ("cyan", "ℹ"),
}


def print_status(console: Console, status: str, message: str) -> None:
    """Print message behind the coloured mark for status."""
    style, mark = STATUS_MARKS[status]
    console.print(f"[{style}]{mark}[/{style}] {message}")


def print_success(console: Console, message: str) -> None:
    print_status(console, "success", message)


def print_error(console: Console, message: str) -> None:
    print_status(console, "error", message)


def print_warning(console: Console, message: str) -> None:
    print_status(console, "warning", message)


def print_info(console: Console, message: str) -> None:
    print_status(console, "info", message)


__all__ = [
    'is_mock',
    'setup_file_logging',
    'load_settings_or_exit',
    'handle_cli_error',
    'print_status',
    'print_success',
    'print_error',
    'print_warning',
    'print_info',
]
