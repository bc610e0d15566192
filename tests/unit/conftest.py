"""Unit test fixtures: NSX service exports and parsed documents.

For shared fixtures across all tests, see ../conftest.py.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from nsx_netpol.schemas import Service, ServiceEntry, ServicesDocument


@pytest.fixture
def web_service_data() -> dict[str, Any]:
    """Return a two-entry TCP ingress service in NSX export shape."""
    return {
        "display_name": "Web Service",
        "service_entries": [
            {"display_name": "HTTP", "l4_protocol": "TCP", "destination_ports": ["80"]},
            {"display_name": "HTTPS", "l4_protocol": "TCP", "destination_ports": ["443"]},
        ],
    }


@pytest.fixture
def services_export(web_service_data: dict[str, Any]) -> dict[str, Any]:
    """Return a full export with ingress, egress, mixed and empty services."""
    return {
        "services": [
            web_service_data,
            {
                "display_name": "DNS Client",
                "service_entries": [
                    {"display_name": "DNS-UDP", "l4_protocol": "UDP", "source_ports": ["53"]},
                ],
            },
            {
                "display_name": "A!! B__C",
                "service_entries": [
                    {
                        "display_name": "Both",
                        "l4_protocol": "TCP",
                        "destination_ports": ["8080", "abc"],
                        "source_ports": ["9090"],
                    },
                ],
            },
            {"display_name": "Empty", "service_entries": []},
        ]
    }


@pytest.fixture
def services_document(services_export: dict[str, Any]) -> ServicesDocument:
    """Return the sample export as a validated ServicesDocument."""
    return ServicesDocument.model_validate(services_export)


@pytest.fixture
def web_service(web_service_data: dict[str, Any]) -> Service:
    """Return the web service as a validated Service."""
    return Service.model_validate(web_service_data)


@pytest.fixture
def tcp_entry() -> ServiceEntry:
    """Return a TCP entry with destination ports only."""
    return ServiceEntry(name="HTTP", protocol="TCP", destination_ports=("80", "8080"))


@pytest.fixture
def services_json_file(tmp_path: Path, services_export: dict[str, Any]) -> Path:
    """Write the sample export to a JSON file."""
    path = tmp_path / "services.json"
    path.write_text(json.dumps(services_export))
    return path
