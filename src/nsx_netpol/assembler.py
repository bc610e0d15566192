"""NetworkPolicy assembly for NSX services.

``assemble_policy`` turns one service into one NetworkPolicy and is pure:
no logging, no configuration lookups. ``translate_services`` runs it over a
whole document in input order, logs every dropped port and degenerate policy,
and collects the results.

Example:
    >>> from nsx_netpol.assembler import translate_services
    >>> from nsx_netpol.schemas import ServicesDocument
    >>> doc = ServicesDocument.model_validate({
    ...     "services": [{
    ...         "display_name": "Web Service",
    ...         "service_entries": [{"l4_protocol": "TCP", "destination_ports": ["80"]}],
    ...     }]
    ... })
    >>> result = translate_services(doc, namespace="custom-namespace")
    >>> result.policies[0].name
    'web-service'
"""

from __future__ import annotations

from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field

from nsx_netpol.diagnostics import PortDiagnostic
from nsx_netpol.naming import is_dns1123_label, sanitize_name
from nsx_netpol.ports import PortMode
from nsx_netpol.rules import build_rules
from nsx_netpol.schemas import (
    APP_LABEL,
    NetworkPolicy,
    PolicyMetadata,
    PolicySpec,
    PortGroup,
    Service,
    ServicesDocument,
    policy_types_for,
)
from nsx_netpol.telemetry.tracing import traced_span

logger = structlog.get_logger(__name__)

DEFAULT_NAMESPACE = "default"


class PolicyAssembly(BaseModel):
    """One assembled policy plus the ports dropped while building it."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    policy: NetworkPolicy
    diagnostics: tuple[PortDiagnostic, ...] = Field(default_factory=tuple)


class TranslationResult(BaseModel):
    """Result of translating a services document.

    Attributes:
        policies: One NetworkPolicy per input service, in input order.
        diagnostics: Every dropped port token, in input order.
        warnings: Human-readable notes about degenerate policies.
        policies_count: Number of policies generated.
        ingress_rules_count: Total ingress PortGroups across all policies.
        egress_rules_count: Total egress PortGroups across all policies.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    policies: tuple[NetworkPolicy, ...] = Field(default_factory=tuple)
    diagnostics: tuple[PortDiagnostic, ...] = Field(default_factory=tuple)
    warnings: tuple[str, ...] = Field(default_factory=tuple)
    policies_count: int = Field(default=0, ge=0)
    ingress_rules_count: int = Field(default=0, ge=0)
    egress_rules_count: int = Field(default=0, ge=0)

    @property
    def dropped_ports_count(self) -> int:
        return len(self.diagnostics)

    @property
    def has_diagnostics(self) -> bool:
        """Check if any port token was dropped."""
        return len(self.diagnostics) > 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def is_empty(self) -> bool:
        """Check if no policies were generated."""
        return self.policies_count == 0

    def summary(self) -> dict[str, Any]:
        """Generate a summary dictionary for logging/reporting."""
        return {
            "policies_count": self.policies_count,
            "ingress_rules_count": self.ingress_rules_count,
            "egress_rules_count": self.egress_rules_count,
            "dropped_ports_count": self.dropped_ports_count,
            "warnings_count": len(self.warnings),
        }


def assemble_policy(
    service: Service,
    namespace: str,
    mode: PortMode = PortMode.NUMERIC,
) -> PolicyAssembly:
    """Assemble the NetworkPolicy for a single service.

    Ingress and egress groups keep the order of the entries that produced
    them. ``policyTypes`` lists Ingress before Egress and only includes a
    direction that has at least one group.

    Args:
        service: Service to translate.
        namespace: Target namespace, written through unchanged.
        mode: Port parsing mode.

    Returns:
        PolicyAssembly with the policy and any dropped-port diagnostics.
    """
    ingress: list[PortGroup] = []
    egress: list[PortGroup] = []
    diagnostics: list[PortDiagnostic] = []

    for entry in service.entries:
        rules = build_rules(entry, mode=mode, service_name=service.name)
        if rules.ingress is not None:
            ingress.append(rules.ingress)
        if rules.egress is not None:
            egress.append(rules.egress)
        diagnostics.extend(rules.diagnostics)

    name = sanitize_name(service.name)
    policy = NetworkPolicy(
        metadata=PolicyMetadata(name=name, namespace=namespace),
        spec=PolicySpec(
            pod_selector={APP_LABEL: name},
            policy_types=policy_types_for(ingress, egress),
            ingress=tuple(ingress),
            egress=tuple(egress),
        ),
    )
    return PolicyAssembly(policy=policy, diagnostics=tuple(diagnostics))


def _degenerate_warnings(service: Service, policy: NetworkPolicy) -> list[str]:
    warnings: list[str] = []
    if not policy.name:
        warnings.append(
            f"Service {service.name!r} sanitizes to an empty name; "
            "the policy is not a valid Kubernetes object"
        )
    elif not is_dns1123_label(policy.name):
        warnings.append(
            f"Service {service.name!r} sanitizes to {policy.name!r}, "
            "which exceeds the 63 character label limit"
        )
    if not policy.spec.policy_types:
        warnings.append(
            f"Service {service.name!r} produced no ingress or egress rules; "
            "policyTypes is empty"
        )
    return warnings


def translate_services(
    document: ServicesDocument,
    namespace: str = DEFAULT_NAMESPACE,
    mode: PortMode = PortMode.NUMERIC,
) -> TranslationResult:
    """Translate every service in a document into a NetworkPolicy.

    Services are processed in input order and the result preserves it.
    Dropped ports are logged as ``port.dropped`` warnings and collected on
    the result; degenerate policies are kept and reported as warnings.

    Args:
        document: Parsed services document.
        namespace: Target namespace for every policy.
        mode: Port parsing mode.

    Returns:
        TranslationResult with policies, diagnostics and counts.
    """
    span_attributes = {
        "nsx_netpol.namespace": namespace,
        "nsx_netpol.port_mode": mode.value,
        "nsx_netpol.services_count": len(document.services),
    }
    with traced_span(__name__, "nsx_netpol.translate", span_attributes) as span:
        policies: list[NetworkPolicy] = []
        diagnostics: list[PortDiagnostic] = []
        warnings: list[str] = []
        ingress_count = 0
        egress_count = 0

        for service in document.services:
            assembly = assemble_policy(service, namespace, mode)
            policy = assembly.policy

            for diagnostic in assembly.diagnostics:
                logger.warning("port.dropped", **diagnostic.log_context())
            diagnostics.extend(assembly.diagnostics)

            for warning in _degenerate_warnings(service, policy):
                logger.warning("policy.degenerate", service=service.name, detail=warning)
                warnings.append(warning)

            ingress_count += len(policy.spec.ingress)
            egress_count += len(policy.spec.egress)
            policies.append(policy)

            logger.debug(
                "policy.assembled",
                name=policy.name,
                policy_types=list(policy.spec.policy_types),
                ingress=len(policy.spec.ingress),
                egress=len(policy.spec.egress),
            )

        result = TranslationResult(
            policies=tuple(policies),
            diagnostics=tuple(diagnostics),
            warnings=tuple(warnings),
            policies_count=len(policies),
            ingress_rules_count=ingress_count,
            egress_rules_count=egress_count,
        )
        span.set_attribute("nsx_netpol.policies_count", result.policies_count)
        span.set_attribute("nsx_netpol.dropped_ports_count", result.dropped_ports_count)

    logger.info("translate.completed", namespace=namespace, **result.summary())
    return result


__all__ = [
    "DEFAULT_NAMESPACE",
    "PolicyAssembly",
    "TranslationResult",
    "assemble_policy",
    "translate_services",
]
