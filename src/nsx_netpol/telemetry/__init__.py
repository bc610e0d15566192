"""Logging and tracing support for nsx-netpol."""

from __future__ import annotations

from nsx_netpol.telemetry.logging import add_trace_context, configure_logging
from nsx_netpol.telemetry.tracing import get_tracer, reset_tracer, set_tracer, traced_span

__all__ = [
    "add_trace_context",
    "configure_logging",
    "get_tracer",
    "reset_tracer",
    "set_tracer",
    "traced_span",
]
