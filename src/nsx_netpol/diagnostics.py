"""Structured diagnostics for recoverable translation problems.

A malformed port token does not abort translation. The port is dropped and a
PortDiagnostic is returned alongside the result so callers and tests can
assert on exactly what was omitted.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Direction(str, Enum):
    """Traffic direction a port token was read for."""

    INGRESS = "ingress"
    EGRESS = "egress"


class PortDiagnostic(BaseModel):
    """A port token that was dropped from a PortGroup.

    Attributes:
        service_name: Display name of the service (unsanitized).
        entry_name: Display name of the service entry.
        direction: ``ingress`` for destination ports, ``egress`` for source ports.
        token: The offending token exactly as found in the input.
        reason: Why the token was rejected.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    service_name: str = Field(default="", description="Service display name")
    entry_name: str = Field(default="", description="Service entry display name")
    direction: Direction = Field(..., description="Direction of the dropped port")
    token: str = Field(..., description="Rejected port token")
    reason: str = Field(..., description="Rejection reason")

    def format(self) -> str:
        """Format the diagnostic for display.

        Example:
            >>> PortDiagnostic(
            ...     service_name="Web", entry_name="HTTP",
            ...     direction=Direction.INGRESS, token="abc", reason="not a decimal port",
            ... ).format()
            "Dropped ingress port 'abc' (service='Web', entry='HTTP'): not a decimal port"
        """
        return (
            f"Dropped {self.direction.value} port {self.token!r} "
            f"(service={self.service_name!r}, entry={self.entry_name!r}): {self.reason}"
        )

    def log_context(self) -> dict[str, Any]:
        """Key-value pairs for structured log events."""
        return {
            "service": self.service_name,
            "entry": self.entry_name,
            "direction": self.direction.value,
            "token": self.token,
            "reason": self.reason,
        }


__all__ = ["Direction", "PortDiagnostic"]
