"""Unit tests for logging configuration and the tracer factory."""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import pytest
import structlog
from opentelemetry import trace

from nsx_netpol.telemetry.logging import add_trace_context, configure_logging, resolve_level
from nsx_netpol.telemetry.tracing import get_tracer, reset_tracer, set_tracer, traced_span


class TestConfigureLogging:
    """Tests for configure_logging."""

    @pytest.mark.requirement("logging.stderr")
    def test_logs_go_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(log_level="INFO", log_format="json")

        structlog.get_logger("test").info("hello", key="value")

        captured = capsys.readouterr()
        assert captured.out == ""
        event = json.loads(captured.err.strip())
        assert event["event"] == "hello"
        assert event["key"] == "value"
        assert event["level"] == "info"
        assert "timestamp" in event

    @pytest.mark.requirement("logging.stderr")
    def test_level_filtering(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(log_level="WARNING", log_format="json")
        log = structlog.get_logger("test")

        log.info("hidden")
        log.warning("shown")

        lines = [line for line in capsys.readouterr().err.splitlines() if line]
        assert [json.loads(line)["event"] for line in lines] == ["shown"]

    def test_console_format(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(log_level="INFO", log_format="console")

        structlog.get_logger("test").info("plain", token="abc")

        err = capsys.readouterr().err
        assert "plain" in err
        assert "token=abc" in err

    def test_unknown_level(self) -> None:
        with pytest.raises(ValueError, match="Unknown log level"):
            configure_logging(log_level="LOUD")

    @pytest.mark.parametrize(("name", "value"), [("debug", 10), ("INFO", 20), ("Error", 40)])
    def test_resolve_level(self, name: str, value: int) -> None:
        assert resolve_level(name) == value


class TestAddTraceContext:
    """Tests for the trace context processor."""

    def test_no_active_span_leaves_event_unchanged(self) -> None:
        event = add_trace_context(None, "info", {"event": "x"})

        assert event == {"event": "x"}

    def test_active_span_adds_ids(self) -> None:
        span_context = trace.SpanContext(trace_id=0x1234, span_id=0xABCD, is_remote=False)
        span = trace.NonRecordingSpan(span_context)

        with patch("nsx_netpol.telemetry.logging.trace.get_current_span", return_value=span):
            event = add_trace_context(None, "info", {"event": "x"})

        assert event["trace_id"] == format(0x1234, "032x")
        assert event["span_id"] == format(0xABCD, "016x")


class TestTracerFactory:
    """Tests for get_tracer caching and fallback."""

    def test_tracer_cached_per_name(self) -> None:
        assert get_tracer("a") is get_tracer("a")

    def test_set_tracer_overrides(self) -> None:
        mock_tracer = MagicMock()
        set_tracer("custom", mock_tracer)

        assert get_tracer("custom") is mock_tracer

        set_tracer("custom", None)
        assert get_tracer("custom") is not mock_tracer

    def test_failure_falls_back_to_noop(self) -> None:
        with patch(
            "nsx_netpol.telemetry.tracing.trace.get_tracer",
            side_effect=RuntimeError("broken"),
        ):
            tracer = get_tracer("failing")

        assert isinstance(tracer, trace.NoOpTracer)
        assert isinstance(get_tracer("other"), trace.NoOpTracer)

        reset_tracer()
        assert not isinstance(get_tracer("other"), trace.NoOpTracer)


class TestTracedSpan:
    """Tests for the traced_span context manager."""

    def test_sets_initial_attributes(self) -> None:
        tracer = MagicMock()
        span = tracer.start_as_current_span.return_value.__enter__.return_value
        set_tracer("spans", tracer)

        with traced_span("spans", "work", {"nsx_netpol.namespace": "ns"}) as active:
            assert active is span

        tracer.start_as_current_span.assert_called_once_with(
            "work", record_exception=False, set_status_on_exception=False
        )
        span.set_attribute.assert_called_once_with("nsx_netpol.namespace", "ns")

    def test_marks_span_failed_and_reraises(self) -> None:
        tracer = MagicMock()
        span = tracer.start_as_current_span.return_value.__enter__.return_value
        set_tracer("spans", tracer)

        with pytest.raises(ValueError, match="boom"), traced_span("spans", "work"):
            raise ValueError("boom")

        status = span.set_status.call_args.args[0]
        assert status.status_code == trace.StatusCode.ERROR
        span.set_attribute.assert_called_once_with("exception.type", "ValueError")
