"""CLI output helpers and exit codes.

stdout carries only generated YAML. Errors, warnings and progress messages
go to stderr so the YAML stream can be piped straight into ``kubectl apply``.
"""

from __future__ import annotations

import sys
from enum import IntEnum
from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from typing import NoReturn


class ExitCode(IntEnum):
    """Exit codes for nsx-netpol commands."""

    SUCCESS = 0
    """Command completed successfully."""

    GENERAL_ERROR = 1
    """General error (catch-all for failures)."""

    USAGE_ERROR = 2
    """Invalid usage (bad arguments, missing required options)."""

    FILE_NOT_FOUND = 3
    """Input file not found."""

    IO_ERROR = 4
    """Input file could not be read, or the output file could not be written."""

    VALIDATION_ERROR = 5
    """Input validation failed, or ports were dropped in strict mode."""


def _with_context(prefix: str, message: str, context: dict[str, str | int | bool | None]) -> str:
    if not context:
        return f"{prefix}: {message}"
    context_str = ", ".join(f"{k}={v}" for k, v in context.items() if v is not None)
    return f"{prefix}: {message} ({context_str})"


def error(message: str, **context: str | int | bool | None) -> None:
    """Print an error message to stderr.

    Example:
        error("File not found", path="/path/to/file")
        # Output: Error: File not found (path=/path/to/file)
    """
    click.echo(_with_context("Error", message, context), err=True)


def error_exit(
    message: str,
    exit_code: ExitCode | int = ExitCode.GENERAL_ERROR,
    **context: str | int | bool | None,
) -> NoReturn:
    """Print an error message to stderr and exit with a code."""
    error(message, **context)
    sys.exit(int(exit_code))


def warn(message: str, **context: str | int | bool | None) -> None:
    """Print a warning message to stderr."""
    click.echo(_with_context("Warning", message, context), err=True)


def info(message: str) -> None:
    """Print an informational message to stderr."""
    click.echo(message, err=True)


__all__ = ["ExitCode", "error", "error_exit", "info", "warn"]
