"""OpenTelemetry tracing for translation runs.

Tracers come from the globally configured provider and are cached per
instrumenting module. Without a configured SDK the API hands out
non-recording tracers, so spans cost nothing. If the provider itself is
broken, every later lookup returns a NoOpTracer instead of failing the run.
"""

from __future__ import annotations

import threading
from collections.abc import Generator, Mapping
from contextlib import contextmanager
from typing import TYPE_CHECKING

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

if TYPE_CHECKING:
    from opentelemetry.trace import Span, Tracer

AttributeValue = str | int | float | bool

_tracers: dict[str, Tracer] = {}
_provider_broken = False
_lock = threading.Lock()


def get_tracer(name: str = "nsx_netpol") -> Tracer:
    """Return the cached tracer for ``name``, creating it on first use.

    Example:
        >>> tracer = get_tracer("nsx_netpol.assembler")
        >>> with tracer.start_as_current_span("translate"):
        ...     pass
    """
    global _provider_broken

    with _lock:
        cached = _tracers.get(name)
        if cached is not None:
            return cached
        if _provider_broken:
            return trace.NoOpTracer()
        try:
            tracer = trace.get_tracer(name)
        except Exception:
            # RecursionError included: test fixtures can leave OTel globals half-replaced
            _provider_broken = True
            return trace.NoOpTracer()
        _tracers[name] = tracer
        return tracer


def set_tracer(name: str, tracer: Tracer | None) -> None:
    """Install a tracer for ``name``, or drop the cached one when None."""
    with _lock:
        if tracer is None:
            _tracers.pop(name, None)
        else:
            _tracers[name] = tracer


def reset_tracer() -> None:
    """Forget cached tracers and any earlier provider failure."""
    global _provider_broken
    with _lock:
        _tracers.clear()
        _provider_broken = False


@contextmanager
def traced_span(
    tracer_name: str,
    span_name: str,
    attributes: Mapping[str, AttributeValue] | None = None,
) -> Generator[Span, None, None]:
    """Run a block inside a span, marking the span as failed on exceptions.

    Args:
        tracer_name: Instrumenting module, usually ``__name__``.
        span_name: Span name such as ``nsx_netpol.translate``.
        attributes: Attributes set when the span starts.

    Yields:
        The active span, for attributes known only at the end of the block.
    """
    tracer = get_tracer(tracer_name)
    with tracer.start_as_current_span(
        span_name,
        record_exception=False,
        set_status_on_exception=False,
    ) as span:
        for key, value in (attributes or {}).items():
            span.set_attribute(key, value)
        try:
            yield span
        except Exception as e:
            span.set_status(Status(StatusCode.ERROR, str(e)))
            span.set_attribute("exception.type", type(e).__name__)
            raise


__all__ = ["get_tracer", "reset_tracer", "set_tracer", "traced_span"]
