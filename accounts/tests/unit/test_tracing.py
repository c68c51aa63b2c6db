"""Tests for span emitters."""

import logging

import pytest

from accounts.tracing import LoggingTracer, NullTracer, Span


class TestSpan:
    """Tests for Span."""

    def test_attributes_and_end(self):
        span = Span("work", {"service": "user"})
        span.set_attribute("id", "u1")
        span.end()
        ended_at = span.ended_at
        span.end()

        assert span.attributes == {"service": "user", "id": "u1"}
        assert span.ended_at == ended_at
        assert span.duration_ms >= 0


class TestTracers:
    """Tests for tracer implementations."""

    def test_null_tracer_yields_span(self):
        with NullTracer().span("work", service="user") as span:
            assert span.name == "work"
            assert span.attributes == {"service": "user"}

    def test_logging_tracer_logs_finished_span(self, caplog):
        tracer = LoggingTracer()

        with caplog.at_level(logging.DEBUG, logger="accounts.tracing"):
            with tracer.span("Get Users", service="user") as span:
                span.set_attribute("id", "u1")

        assert span.ended_at is not None
        assert "Get Users" in caplog.text
        assert "'id': 'u1'" in caplog.text

    def test_logging_tracer_does_not_swallow_exceptions(self, caplog):
        tracer = LoggingTracer()

        with caplog.at_level(logging.DEBUG, logger="accounts.tracing"):
            with pytest.raises(ValueError):
                with tracer.span("failing"):
                    raise ValueError("boom")

        assert "failing" in caplog.text
