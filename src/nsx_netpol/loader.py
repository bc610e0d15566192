"""Loading of NSX services exports.

Reads a JSON file and validates it into a ServicesDocument. Every failure is
raised as an InputError subclass before any translation happens.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from nsx_netpol.exceptions import (
    InputFileNotFoundError,
    InputReadError,
    InvalidDocumentError,
    InvalidJSONError,
)
from nsx_netpol.schemas import ServicesDocument

logger = structlog.get_logger(__name__)


def _format_validation_errors(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err["loc"]) or "<root>"
        parts.append(f"{location}: {err['msg']}")
    return "; ".join(parts)


def parse_services(data: Any, source: str | None = None) -> ServicesDocument:
    """Validate already-decoded JSON into a ServicesDocument.

    Args:
        data: Decoded JSON value.
        source: Optional source path for error messages.

    Raises:
        InvalidDocumentError: If the top-level value is not an object with a
            ``services`` list, or a field has the wrong type.
    """
    if not isinstance(data, dict):
        msg = f"Expected a JSON object at top level, got {type(data).__name__}"
        raise InvalidDocumentError(msg, path=source)

    try:
        return ServicesDocument.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid services document: {_format_validation_errors(e)}"
        raise InvalidDocumentError(
            msg,
            path=source,
            errors=[dict(err) for err in e.errors(include_url=False)],
        ) from e


def load_services(path: Path) -> ServicesDocument:
    """Load and validate a services export file.

    Args:
        path: Path to the JSON export.

    Returns:
        Validated ServicesDocument.

    Raises:
        InputFileNotFoundError: If the file does not exist.
        InputReadError: If the file cannot be read or decoded as UTF-8.
        InvalidJSONError: If the content is not valid JSON.
        InvalidDocumentError: If the JSON does not match the expected shape.
    """
    if not path.exists():
        raise InputFileNotFoundError(f"Input file not found: {path}", path=str(path))

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        msg = f"Cannot read input file {path}: {e}"
        raise InputReadError(msg, path=str(path)) from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        msg = f"Invalid JSON in {path.name}: {e.msg} (line {e.lineno}, column {e.colno})"
        raise InvalidJSONError(msg, path=str(path), line=e.lineno, column=e.colno) from e
    except ValueError as e:
        # Integer literals past the interpreter's digit limit
        msg = f"Invalid JSON in {path.name}: {e}"
        raise InvalidJSONError(msg, path=str(path)) from e

    document = parse_services(data, source=str(path))
    logger.info("load.completed", path=str(path), services=len(document.services))
    return document


__all__ = ["load_services", "parse_services"]
