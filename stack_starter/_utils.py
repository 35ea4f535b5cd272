"""Utilities for console output and logging."""

__all__ = (
    "configure_logging",
    "console",
    "log_fail",
    "log_info",
    "log_success",
    "log_warn",
)

import logging

from rich.console import Console
from rich.logging import RichHandler

_TICK = "[bold green]✓[/]"
_INFO = "[cyan]•[/]"
_WARN = "[yellow]![/]"
_FAIL = "[red]x[/]"

console = Console()


def configure_logging(verbose: bool = False) -> None:
    """Route ``stack_starter`` logs through rich.

    Debug records are only shown when ``verbose`` is enabled.
    """
    logger = logging.getLogger("stack_starter")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        logger.addHandler(RichHandler(console=console, show_path=False, markup=False))
    logger.propagate = False


def log_success(message: str) -> None:
    """Print a success message with consistent styling."""

    console.print(f"{_TICK} {message}")


def log_info(message: str) -> None:
    """Print an informational message with consistent styling."""

    console.print(f"{_INFO} {message}")


def log_warn(message: str) -> None:
    """Print a warning message with consistent styling."""

    console.print(f"{_WARN} {message}")


def log_fail(message: str) -> None:
    """Print an error message with consistent styling."""

    console.print(f"{_FAIL} {message}")
