from __future__ import annotations

import json
import logging

import pytest

from infra.operational_support import (
    REDACTED,
    REDACTED_EMAIL,
    OperationalSupport,
    TraceIdLogFilter,
    bind_trace_id,
    current_trace_id,
)


def test_operational_support_emits_redacted_structured_event(tmp_path):
    events_path = tmp_path / "support-events.jsonl"
    support = OperationalSupport(events_path=events_path)

    with bind_trace_id("run-test-123"):
        trace_id = support.emit_event(
            event_type="support.test",
            message="token=abc123 alice@example.com",
            data={
                "password": "StrongPass123",
                "contact": "alice@example.com",
                "nested": {"api_token": "secret-value"},
            },
        )

    assert trace_id == "run-test-123"
    rows = events_path.read_text(encoding="utf-8").splitlines()
    assert len(rows) == 1
    payload = json.loads(rows[0])
    assert payload["trace_id"] == "run-test-123"
    assert payload["event_type"] == "support.test"
    assert "abc123" not in payload["message"]
    assert "alice@example.com" not in payload["message"]
    assert payload["data"]["password"] == REDACTED
    assert payload["data"]["nested"]["api_token"] == REDACTED
    assert payload["data"]["contact"] == REDACTED_EMAIL


def test_operational_support_capture_exception_records_crash_event(tmp_path):
    events_path = tmp_path / "support-events.jsonl"
    support = OperationalSupport(events_path=events_path)

    try:
        raise RuntimeError("token=bad-token")
    except RuntimeError as exc:
        with bind_trace_id("run-crash-1"):
            support.capture_exception(
                exc_type=RuntimeError,
                exc_value=exc,
                exc_traceback=exc.__traceback__,
                context="unit-test",
            )

    payload = json.loads(events_path.read_text(encoding="utf-8").splitlines()[0])
    assert payload["event_type"] == "app.crash"
    assert payload["level"] == "ERROR"
    assert payload["trace_id"] == "run-crash-1"
    assert "bad-token" not in payload["message"]
    assert payload["data"]["exception_type"] == "RuntimeError"


def test_track_emits_ok_and_failed_events(tmp_path):
    support = OperationalSupport(events_path=tmp_path / "events.jsonl")

    with bind_trace_id("run-track"):
        with support.track("cli.overview", scope="Delivery Team"):
            pass
        with pytest.raises(ValueError):
            with support.track("cli.export", fmt="xlsx"):
                raise ValueError("disk full")

    events = support.read_events(trace_id="run-track")
    assert [e["event_type"] for e in events] == ["cli.overview.ok", "cli.export.failed"]
    assert events[0]["data"]["scope"] == "Delivery Team"
    assert "elapsed_ms" in events[1]["data"]
    assert events[1]["level"] == "ERROR"


def test_read_events_filters_by_trace_and_skips_garbage(tmp_path):
    events_path = tmp_path / "events.jsonl"
    support = OperationalSupport(events_path=events_path)
    support.emit_event(event_type="a", message="first", trace_id="run-a")
    with events_path.open("a", encoding="utf-8") as handle:
        handle.write("not json\n\n")
    support.emit_event(event_type="b", message="second", trace_id="run-b")

    assert [e["event_type"] for e in support.read_events()] == ["a", "b"]
    assert [e["message"] for e in support.read_events(trace_id="run-b")] == ["second"]


def test_bind_trace_id_generates_and_restores():
    assert current_trace_id() is None
    with bind_trace_id() as generated:
        assert generated.startswith("run-")
        assert current_trace_id() == generated
    assert current_trace_id() is None


def test_trace_id_log_filter_tags_records():
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
    with bind_trace_id("run-log"):
        TraceIdLogFilter().filter(record)
    assert record.trace_id == "run-log"


def test_read_events_filters_by_event_prefix(tmp_path):
    support = OperationalSupport(events_path=tmp_path / "events.jsonl")
    support.emit_event(event_type="export.xlsx.ok", message="xlsx", trace_id="run-1")
    support.emit_event(event_type="app.crash", message="boom", level="error", trace_id="run-1")
    support.emit_event(event_type="export.png.failed", message="png", trace_id="run-2")

    exports = support.read_events(event_prefix="export.")
    assert [e["event_type"] for e in exports] == ["export.xlsx.ok", "export.png.failed"]
    crashes = support.read_events(trace_id="run-1", event_prefix="app.")
    assert crashes[0]["level"] == "ERROR"
    assert crashes[0]["pid"] > 0
