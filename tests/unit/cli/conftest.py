"""Unit test fixtures for the CLI module.

For shared fixtures across all tests, see ../../conftest.py.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep NSX_NETPOL_* settings from the host environment out of CLI tests."""
    for name in (
        "NSX_NETPOL_NAMESPACE",
        "NSX_NETPOL_PORT_MODE",
        "NSX_NETPOL_LOG_LEVEL",
        "NSX_NETPOL_LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def web_export_file(tmp_path: Path) -> Path:
    """Write a single-service export with two TCP ingress entries."""
    content = {
        "services": [
            {
                "display_name": "Web Service",
                "service_entries": [
                    {"l4_protocol": "TCP", "destination_ports": ["80"]},
                    {"l4_protocol": "TCP", "destination_ports": ["443"]},
                ],
            }
        ]
    }
    path = tmp_path / "web.json"
    path.write_text(json.dumps(content))
    return path


@pytest.fixture
def bad_port_export_file(tmp_path: Path) -> Path:
    """Write an export with one malformed destination port."""
    content = {
        "services": [
            {
                "display_name": "Web",
                "service_entries": [
                    {
                        "display_name": "HTTP",
                        "l4_protocol": "TCP",
                        "destination_ports": ["80", "abc"],
                    }
                ],
            }
        ]
    }
    path = tmp_path / "bad-port.json"
    path.write_text(json.dumps(content))
    return path
