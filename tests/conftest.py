"""Shared pytest fixtures for nsx-netpol tests.

NOTE: Do NOT add __init__.py to test directories - pytest uses importlib mode
which can cause namespace collisions with __init__.py files.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
import structlog

from nsx_netpol.telemetry.tracing import reset_tracer

if TYPE_CHECKING:
    from collections.abc import Generator


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers",
        "requirement(id): mark test as validating a specific requirement",
    )


@pytest.fixture(autouse=True)
def reset_telemetry() -> Generator[None, None, None]:
    """Restore default structlog configuration and tracer cache around each test."""
    structlog.reset_defaults()
    reset_tracer()
    yield
    structlog.reset_defaults()
    reset_tracer()
