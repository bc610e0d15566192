"""Port token parsing.

NSX exports list ports as decimal strings. Two modes are supported:

- ``numeric``: the token must be a decimal port number in 1-65535 and is
  emitted as an integer. Anything else is rejected and the caller drops it.
- ``passthrough``: the token is emitted unchanged as a string, which keeps
  named ports such as ``http``.
"""

from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict

MIN_PORT = 1
MAX_PORT = 65535

_DECIMAL_PATTERN = re.compile(r"^[0-9]+$")


class PortMode(str, Enum):
    """How port tokens are written into the generated policy."""

    NUMERIC = "numeric"
    PASSTHROUGH = "passthrough"


class PortParseResult(BaseModel):
    """Outcome of parsing a single port token."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    value: int | str | None = None
    ok: bool
    reason: str | None = None


def parse_port(token: str, mode: PortMode = PortMode.NUMERIC) -> PortParseResult:
    """Parse a port token according to the given mode.

    Never raises; failures are reported through ``ok`` and ``reason``.

    Args:
        token: Port token from the input record.
        mode: Parsing mode.

    Returns:
        PortParseResult with the parsed value on success.

    Example:
        >>> parse_port("443").value
        443
        >>> parse_port("abc").ok
        False
        >>> parse_port("http", PortMode.PASSTHROUGH).value
        'http'
    """
    if mode is PortMode.PASSTHROUGH:
        if not token.strip():
            return PortParseResult(ok=False, reason="empty port token")
        return PortParseResult(value=token, ok=True)

    stripped = token.strip()
    if not _DECIMAL_PATTERN.match(stripped):
        return PortParseResult(ok=False, reason="not a decimal port number")

    # Length check first: int() refuses digit strings past the interpreter limit
    significant = stripped.lstrip("0") or "0"
    if len(significant) > len(str(MAX_PORT)):
        return PortParseResult(ok=False, reason=f"port out of range ({MIN_PORT}-{MAX_PORT})")

    port = int(significant)
    if not MIN_PORT <= port <= MAX_PORT:
        return PortParseResult(
            ok=False, reason=f"port {port} out of range ({MIN_PORT}-{MAX_PORT})"
        )
    return PortParseResult(value=port, ok=True)


__all__ = ["MAX_PORT", "MIN_PORT", "PortMode", "PortParseResult", "parse_port"]
