"""Unit tests for per-entry rule construction."""

from __future__ import annotations

import pytest

from nsx_netpol.diagnostics import Direction
from nsx_netpol.ports import PortMode
from nsx_netpol.rules import build_rules
from nsx_netpol.schemas import Port, ServiceEntry


class TestBuildRules:
    """Tests for build_rules."""

    @pytest.mark.requirement("rules.build")
    def test_destination_ports_build_ingress_group(self, tcp_entry: ServiceEntry) -> None:
        result = build_rules(tcp_entry)

        assert result.ingress is not None
        assert result.ingress.ports == (
            Port(port=80, protocol="TCP"),
            Port(port=8080, protocol="TCP"),
        )
        assert result.egress is None
        assert result.diagnostics == ()

    @pytest.mark.requirement("rules.build")
    def test_source_ports_build_egress_group(self) -> None:
        entry = ServiceEntry(name="DNS", protocol="UDP", source_ports=("53",))

        result = build_rules(entry)

        assert result.ingress is None
        assert result.egress is not None
        assert result.egress.ports == (Port(port=53, protocol="UDP"),)

    @pytest.mark.requirement("rules.build")
    def test_both_lists_build_both_groups(self) -> None:
        entry = ServiceEntry(
            protocol="TCP", destination_ports=("443",), source_ports=("1024", "2048")
        )

        result = build_rules(entry)

        assert result.ingress is not None
        assert result.egress is not None
        assert [p.port for p in result.ingress.ports] == [443]
        assert [p.port for p in result.egress.ports] == [1024, 2048]

    @pytest.mark.requirement("rules.build")
    def test_no_ports_build_no_groups(self) -> None:
        """Test that an entry without ports yields no groups, not empty ones."""
        result = build_rules(ServiceEntry(protocol="TCP"))

        assert result.ingress is None
        assert result.egress is None
        assert result.diagnostics == ()

    @pytest.mark.requirement("rules.build")
    @pytest.mark.parametrize("protocol", ["TCP", "udp", "SCTP", "ICMP", ""])
    def test_protocol_passed_through_verbatim(self, protocol: str) -> None:
        entry = ServiceEntry(protocol=protocol, destination_ports=("80",), source_ports=("81",))

        result = build_rules(entry)

        assert result.ingress is not None
        assert result.egress is not None
        assert all(p.protocol == protocol for p in result.ingress.ports)
        assert all(p.protocol == protocol for p in result.egress.ports)

    @pytest.mark.requirement("rules.build")
    def test_port_order_preserved(self) -> None:
        entry = ServiceEntry(protocol="TCP", destination_ports=("9000", "22", "443", "22"))

        result = build_rules(entry)

        assert result.ingress is not None
        assert [p.port for p in result.ingress.ports] == [9000, 22, 443, 22]


class TestBuildRulesDiagnostics:
    """Tests for dropped-port diagnostics."""

    @pytest.mark.requirement("rules.diagnostics")
    def test_malformed_port_dropped_with_diagnostic(self) -> None:
        entry = ServiceEntry(name="Web", protocol="TCP", destination_ports=("80", "abc"))

        result = build_rules(entry, service_name="Web Service")

        assert result.ingress is not None
        assert result.ingress.ports == (Port(port=80, protocol="TCP"),)
        assert len(result.diagnostics) == 1
        diagnostic = result.diagnostics[0]
        assert diagnostic.service_name == "Web Service"
        assert diagnostic.entry_name == "Web"
        assert diagnostic.direction is Direction.INGRESS
        assert diagnostic.token == "abc"

    @pytest.mark.requirement("rules.diagnostics")
    def test_all_ports_invalid_yields_no_group(self) -> None:
        """Test that a direction with only rejected tokens emits no empty group."""
        entry = ServiceEntry(protocol="TCP", source_ports=("x", "y"))

        result = build_rules(entry)

        assert result.egress is None
        assert [d.token for d in result.diagnostics] == ["x", "y"]
        assert all(d.direction is Direction.EGRESS for d in result.diagnostics)

    @pytest.mark.requirement("rules.diagnostics")
    def test_diagnostics_ordered_ingress_then_egress(self) -> None:
        entry = ServiceEntry(
            protocol="TCP", destination_ports=("bad-in", "80"), source_ports=("bad-out",)
        )

        result = build_rules(entry)

        assert [d.token for d in result.diagnostics] == ["bad-in", "bad-out"]

    @pytest.mark.requirement("rules.diagnostics")
    def test_passthrough_keeps_named_ports(self) -> None:
        entry = ServiceEntry(protocol="TCP", destination_ports=("http", "443"))

        result = build_rules(entry, mode=PortMode.PASSTHROUGH)

        assert result.ingress is not None
        assert [p.port for p in result.ingress.ports] == ["http", "443"]
        assert result.diagnostics == ()
