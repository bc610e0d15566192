"""Exceptions for NSX to NetworkPolicy translation.

All exceptions inherit from NsxNetpolError so CLI commands can handle them
uniformly. Input errors are fatal and raised before translation starts;
malformed port tokens are never raised, they are reported as diagnostics.
"""

from __future__ import annotations

from typing import Any


class NsxNetpolError(Exception):
    """Base exception for nsx-netpol errors."""

    exit_code: int = 1


class InputError(NsxNetpolError):
    """The input document could not be loaded.

    Attributes:
        path: Path of the offending input file, if known.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class InputFileNotFoundError(InputError):
    """Input file does not exist.

    Example:
        raise InputFileNotFoundError("Input file not found", path="services.json")
    """

    exit_code = 3


class InputReadError(InputError):
    """Input file exists but cannot be read (permissions, directory, encoding)."""

    exit_code = 4


class InvalidJSONError(InputError):
    """Input file is not valid JSON."""

    exit_code = 5

    def __init__(
        self,
        message: str,
        path: str | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        super().__init__(message, path=path)
        self.line = line
        self.column = column


class InvalidDocumentError(InputError):
    """Input JSON does not have the expected services document shape.

    Attributes:
        errors: Validation error details as reported by pydantic.
    """

    exit_code = 5

    def __init__(
        self,
        message: str,
        path: str | None = None,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message, path=path)
        self.errors = errors or []


class ConfigurationError(NsxNetpolError):
    """Environment configuration is invalid."""

    exit_code = 2


__all__ = [
    "ConfigurationError",
    "InputError",
    "InputFileNotFoundError",
    "InputReadError",
    "InvalidDocumentError",
    "InvalidJSONError",
    "NsxNetpolError",
]
