"""Per-entry ingress and egress rule construction.

Each service entry yields at most one ingress PortGroup (from its
destination ports) and at most one egress PortGroup (from its source ports).
The entry's protocol applies to every port in both groups.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from nsx_netpol.diagnostics import Direction, PortDiagnostic
from nsx_netpol.ports import PortMode, parse_port
from nsx_netpol.schemas import PortGroup, ServiceEntry


class RuleBuildResult(BaseModel):
    """Rules produced for one service entry."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    ingress: PortGroup | None = None
    egress: PortGroup | None = None
    diagnostics: tuple[PortDiagnostic, ...] = Field(default_factory=tuple)


def _build_group(
    tokens: tuple[str, ...],
    entry: ServiceEntry,
    direction: Direction,
    mode: PortMode,
    service_name: str,
    diagnostics: list[PortDiagnostic],
) -> PortGroup | None:
    if not tokens:
        return None

    ports: list[int | str] = []
    for token in tokens:
        parsed = parse_port(token, mode)
        if parsed.ok and parsed.value is not None:
            ports.append(parsed.value)
            continue
        diagnostics.append(
            PortDiagnostic(
                service_name=service_name,
                entry_name=entry.name,
                direction=direction,
                token=token,
                reason=parsed.reason or "invalid port",
            )
        )

    # Every token rejected: no group rather than an empty one.
    if not ports:
        return None
    return PortGroup.from_ports(ports, entry.protocol)


def build_rules(
    entry: ServiceEntry,
    mode: PortMode = PortMode.NUMERIC,
    service_name: str = "",
) -> RuleBuildResult:
    """Build the ingress and egress PortGroups for a service entry.

    Args:
        entry: Service entry to translate.
        mode: Port parsing mode.
        service_name: Owning service name, recorded on diagnostics.

    Returns:
        RuleBuildResult with optional groups and any dropped-port diagnostics.

    Example:
        >>> entry = ServiceEntry(protocol="TCP", destination_ports=("80", "abc"))
        >>> result = build_rules(entry)
        >>> [p.port for p in result.ingress.ports]
        [80]
        >>> result.diagnostics[0].token
        'abc'
    """
    diagnostics: list[PortDiagnostic] = []
    ingress = _build_group(
        entry.destination_ports, entry, Direction.INGRESS, mode, service_name, diagnostics
    )
    egress = _build_group(
        entry.source_ports, entry, Direction.EGRESS, mode, service_name, diagnostics
    )
    return RuleBuildResult(ingress=ingress, egress=egress, diagnostics=tuple(diagnostics))


__all__ = ["RuleBuildResult", "build_rules"]
