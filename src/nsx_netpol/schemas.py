"""Input and output models for NSX to NetworkPolicy translation.

Input models mirror the NSX service export shape (``display_name``,
``service_entries``, ``l4_protocol``, ...). Output models describe a
Kubernetes NetworkPolicy with ingress and egress rules sharing a single
PortGroup type.

Example:
    >>> from nsx_netpol.schemas import ServicesDocument
    >>> doc = ServicesDocument.model_validate({"services": [{"display_name": "Web"}]})
    >>> doc.services[0].name
    'Web'
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing_extensions import Self

API_VERSION = "networking.k8s.io/v1"
KIND = "NetworkPolicy"
APP_LABEL = "app"

PolicyType = Literal["Ingress", "Egress"]


def _port_token(token: Any) -> Any:
    if token is None:
        return ""
    if isinstance(token, bool):
        return "true" if token else "false"
    if isinstance(token, int | float):
        return str(token)
    return token


def _coerce_port_tokens(value: Any) -> Any:
    """Turn scalar port entries from loosely typed exports into string tokens.

    A null list means no ports. Null, boolean and numeric entries become
    tokens so the port parser can accept or drop each one on its own; objects
    and nested lists still fail validation.
    """
    if value is None:
        return ()
    if isinstance(value, list | tuple):
        return tuple(_port_token(token) for token in value)
    return value


class ServiceEntry(BaseModel):
    """One protocol/port rule within a service."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    name: str = Field(default="", alias="display_name", description="Entry display name")
    protocol: str = Field(
        default="", alias="l4_protocol", description="L4 protocol, passed through verbatim"
    )
    destination_ports: tuple[str, ...] = Field(
        default_factory=tuple, description="Destination port tokens (ingress)"
    )
    source_ports: tuple[str, ...] = Field(
        default_factory=tuple, description="Source port tokens (egress)"
    )

    @field_validator("name", "protocol", mode="before")
    @classmethod
    def _null_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("destination_ports", "source_ports", mode="before")
    @classmethod
    def _normalize_ports(cls, v: Any) -> Any:
        return _coerce_port_tokens(v)


class Service(BaseModel):
    """A named group of service entries sharing one workload selector."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    name: str = Field(default="", alias="display_name", description="Service display name")
    entries: tuple[ServiceEntry, ...] = Field(
        default_factory=tuple, alias="service_entries", description="Service entries"
    )

    @field_validator("name", mode="before")
    @classmethod
    def _null_name(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("entries", mode="before")
    @classmethod
    def _null_entries(cls, v: Any) -> Any:
        return () if v is None else v


class ServicesDocument(BaseModel):
    """Top-level NSX services export."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    services: tuple[Service, ...] = Field(..., description="Services to translate")


class Port(BaseModel):
    """A single port/protocol pair inside a PortGroup."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    port: int | str = Field(..., description="Port number, or port name in passthrough mode")
    protocol: str = Field(..., description="Protocol string as given in the export")

    def to_k8s(self) -> dict[str, Any]:
        return {"port": self.port, "protocol": self.protocol}


class PortGroup(BaseModel):
    """One ingress or egress rule block.

    Every port in a group carries the protocol of the service entry that
    produced it. Groups are never empty.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    ports: tuple[Port, ...] = Field(..., min_length=1, description="Ports in this rule")

    @classmethod
    def from_ports(cls, ports: list[int | str], protocol: str) -> PortGroup:
        """Pair every port with the same protocol."""
        return cls(ports=tuple(Port(port=p, protocol=protocol) for p in ports))

    def to_k8s(self) -> dict[str, Any]:
        return {"ports": [p.to_k8s() for p in self.ports]}


class PolicyMetadata(BaseModel):
    """NetworkPolicy object metadata."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., description="Sanitized policy name")
    namespace: str = Field(..., description="Target namespace, not validated")


class PolicySpec(BaseModel):
    """NetworkPolicy spec with label selector and port rules."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    pod_selector: dict[str, str] = Field(
        default_factory=dict, description="matchLabels for the selected pods"
    )
    policy_types: tuple[PolicyType, ...] = Field(
        default_factory=tuple, description="Enforced directions, Ingress before Egress"
    )
    ingress: tuple[PortGroup, ...] = Field(default_factory=tuple, description="Ingress rules")
    egress: tuple[PortGroup, ...] = Field(default_factory=tuple, description="Egress rules")

    @model_validator(mode="after")
    def validate_policy_types(self) -> Self:
        """policy_types must list exactly the directions that have rules."""
        expected = policy_types_for(self.ingress, self.egress)
        if self.policy_types != expected:
            msg = (
                f"policy_types {list(self.policy_types)} does not match rules, "
                f"expected {list(expected)}"
            )
            raise ValueError(msg)
        return self


class NetworkPolicy(BaseModel):
    """Kubernetes NetworkPolicy generated for one service."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    api_version: Literal["networking.k8s.io/v1"] = API_VERSION
    kind: Literal["NetworkPolicy"] = KIND
    metadata: PolicyMetadata
    spec: PolicySpec

    @model_validator(mode="after")
    def validate_selector_matches_name(self) -> Self:
        """The app selector label is always the policy name."""
        if self.spec.pod_selector != {APP_LABEL: self.metadata.name}:
            msg = (
                f"pod_selector {self.spec.pod_selector} must be "
                f"{{'{APP_LABEL}': '{self.metadata.name}'}}"
            )
            raise ValueError(msg)
        return self

    @property
    def name(self) -> str:
        return self.metadata.name

    def to_k8s_manifest(self) -> dict[str, Any]:
        """Generate K8s NetworkPolicy manifest.

        ``ingress`` and ``egress`` keys are only present when the policy has
        rules in that direction; ``policyTypes`` is always present.
        """
        spec: dict[str, Any] = {
            "podSelector": {"matchLabels": dict(self.spec.pod_selector)},
            "policyTypes": list(self.spec.policy_types),
        }
        if self.spec.ingress:
            spec["ingress"] = [group.to_k8s() for group in self.spec.ingress]
        if self.spec.egress:
            spec["egress"] = [group.to_k8s() for group in self.spec.egress]

        return {
            "apiVersion": self.api_version,
            "kind": self.kind,
            "metadata": {
                "name": self.metadata.name,
                "namespace": self.metadata.namespace,
            },
            "spec": spec,
        }


def policy_types_for(
    ingress: tuple[PortGroup, ...] | list[PortGroup],
    egress: tuple[PortGroup, ...] | list[PortGroup],
) -> tuple[PolicyType, ...]:
    """Derive policyTypes from the rules present, in canonical order."""
    types: list[PolicyType] = []
    if ingress:
        types.append("Ingress")
    if egress:
        types.append("Egress")
    return tuple(types)


__all__ = [
    "API_VERSION",
    "APP_LABEL",
    "KIND",
    "NetworkPolicy",
    "PolicyMetadata",
    "PolicySpec",
    "PolicyType",
    "Port",
    "PortGroup",
    "Service",
    "ServiceEntry",
    "ServicesDocument",
    "policy_types_for",
]
