"""Trace ids, redaction and the JSONL log of support events (command runs, exports, crashes)."""
from __future__ import annotations

import json
import logging
import os
import re
import sys
import threading
import time
import traceback
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import asdict, dataclass, field
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Iterator, Mapping, Optional

from infra.path import user_data_dir
from infra.version import get_app_version

REDACTED = "<redacted>"
REDACTED_EMAIL = "<redacted-email>"

logger = logging.getLogger(__name__)

_trace_id_var: ContextVar[Optional[str]] = ContextVar("sb_trace_id", default=None)

_SECRET_WORDS = ("password", "token", "secret", "api_key", "authorization")
_EMAIL_RE = re.compile(r"\b[\w.%+-]+@[\w.-]+\.[A-Za-z]{2,}\b")
_SECRET_ASSIGNMENT_RE = re.compile(
    r"(?i)\b(password|token|secret|api[_-]?key|authorization)\b\s*[:=]\s*([^\s,;]+)"
)
_MAX_REDACT_DEPTH = 8


# ------------------------------------------------------------------ trace ids

def create_trace_id() -> str:
    return "run-{:%Y%m%d%H%M%S}-{}".format(datetime.now(timezone.utc), uuid.uuid4().hex[:8])


def current_trace_id() -> Optional[str]:
    return (_trace_id_var.get() or "").strip() or None


@contextmanager
def bind_trace_id(trace_id: Optional[str] = None) -> Iterator[str]:
    """Make `trace_id` (or a fresh one) current for log records and support events."""
    bound = (trace_id or "").strip() or create_trace_id()
    reset_token = _trace_id_var.set(bound)
    try:
        yield bound
    finally:
        _trace_id_var.reset(reset_token)


class TraceIdLogFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = current_trace_id() or "-"
        return True


# ------------------------------------------------------------------ redaction

def _looks_secret(key: object) -> bool:
    name = str(key or "").lower().replace("-", "_")
    return any(word in name for word in _SECRET_WORDS)


def redact_text(value: str) -> str:
    text = _EMAIL_RE.sub(REDACTED_EMAIL, str(value or ""))
    return _SECRET_ASSIGNMENT_RE.sub(lambda m: f"{m.group(1)}={REDACTED}", text)


def redact_value(value: Any, *, _depth: int = 0) -> Any:
    """JSON-safe copy of `value` with secrets and e-mail addresses masked."""
    if _depth >= _MAX_REDACT_DEPTH:
        return "<max-depth>"
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, Mapping):
        out = {}
        for key, item in value.items():
            out[str(key)] = REDACTED if _looks_secret(key) else redact_value(item, _depth=_depth + 1)
        return out
    if isinstance(value, (list, tuple, set)):
        return [redact_value(item, _depth=_depth + 1) for item in value]
    return redact_text(str(value))


# ------------------------------------------------------------------- events

@dataclass
class SupportEvent:
    event_type: str
    message: str
    trace_id: str
    level: str = "INFO"
    timestamp_utc: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    app_version: str = field(default_factory=get_app_version)
    pid: int = field(default_factory=os.getpid)
    data: Optional[dict] = None

    def to_json(self) -> str:
        payload = {key: value for key, value in asdict(self).items() if value is not None}
        return json.dumps(payload, ensure_ascii=True, sort_keys=True)


class OperationalSupport:
    """Append-only JSONL file of support events, one JSON object per line."""

    def __init__(self, events_path: str | Path | None = None) -> None:
        self._path = Path(events_path) if events_path else user_data_dir() / "logs" / "support-events.jsonl"
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._write_lock = threading.Lock()

    @property
    def events_path(self) -> Path:
        return self._path

    def emit_event(
        self,
        *,
        event_type: str,
        message: str,
        level: str = "INFO",
        trace_id: Optional[str] = None,
        data: Optional[Mapping[str, Any]] = None,
    ) -> str:
        event = SupportEvent(
            event_type=(event_type or "").strip() or "support.event",
            message=redact_text(message),
            trace_id=(trace_id or current_trace_id() or create_trace_id()).strip(),
            level=(level or "INFO").strip().upper(),
            data=redact_value(dict(data)) if data else None,
        )
        with self._write_lock, self._path.open("a", encoding="utf-8") as handle:
            handle.write(event.to_json() + "\n")
        return event.trace_id

    @contextmanager
    def track(self, event_type: str, **data: Any) -> Iterator[str]:
        """Emit `<event_type>.ok` or `<event_type>.failed` with the elapsed time."""
        with bind_trace_id(current_trace_id()) as trace_id:
            started = time.perf_counter()

            def _elapsed() -> dict:
                return {**data, "elapsed_ms": round((time.perf_counter() - started) * 1000, 1)}

            try:
                yield trace_id
            except Exception as exc:
                self.emit_event(
                    event_type=f"{event_type}.failed", level="ERROR", message=str(exc), data=_elapsed()
                )
                raise
            self.emit_event(event_type=f"{event_type}.ok", message=event_type, data=_elapsed())

    def capture_exception(
        self,
        *,
        exc_type: type[BaseException],
        exc_value: BaseException,
        exc_traceback: Any,
        context: str,
    ) -> str:
        return self.emit_event(
            event_type="app.crash",
            level="ERROR",
            message=f"Unhandled exception in {context}: {exc_value}",
            data={
                "context": context,
                "exception_type": getattr(exc_type, "__name__", repr(exc_type)),
                "stacktrace": "".join(traceback.format_exception(exc_type, exc_value, exc_traceback)),
            },
        )

    def read_events(
        self,
        *,
        trace_id: Optional[str] = None,
        event_prefix: Optional[str] = None,
    ) -> list[dict[str, Any]]:
        """Events in file order; unreadable lines are skipped."""
        if not self._path.exists():
            return []
        wanted_trace = (trace_id or "").strip()
        events: list[dict[str, Any]] = []
        with self._path.open(encoding="utf-8", errors="ignore") as handle:
            for raw in handle:
                try:
                    event = json.loads(raw)
                except json.JSONDecodeError:
                    continue
                if not isinstance(event, dict):
                    continue
                if wanted_trace and event.get("trace_id") != wanted_trace:
                    continue
                if event_prefix and not str(event.get("event_type", "")).startswith(event_prefix):
                    continue
                events.append(event)
        return events


# ------------------------------------------------------------ process-wide

_support: Optional[OperationalSupport] = None
_hooks_installed = False


def get_operational_support() -> OperationalSupport:
    global _support
    if _support is None:
        _support = OperationalSupport()
    return _support


def install_global_exception_hooks(support: Optional[OperationalSupport] = None) -> None:
    """Record unhandled exceptions of the main thread and worker threads, then chain to the previous hooks."""
    global _hooks_installed
    if _hooks_installed:
        return
    recorder = support or get_operational_support()

    def _record(exc_type, exc_value, exc_tb, context: str) -> None:
        try:
            recorder.capture_exception(
                exc_type=exc_type, exc_value=exc_value, exc_traceback=exc_tb, context=context
            )
        except OSError:
            logger.exception("Could not record crash event")

    previous_excepthook = sys.excepthook
    previous_thread_hook = threading.excepthook

    def _excepthook(exc_type, exc_value, exc_tb) -> None:
        _record(exc_type, exc_value, exc_tb, "main-thread")
        previous_excepthook(exc_type, exc_value, exc_tb)

    def _thread_excepthook(args) -> None:
        name = getattr(args.thread, "name", None) or "worker-thread"
        _record(args.exc_type, args.exc_value, args.exc_traceback, f"thread:{name}")
        previous_thread_hook(args)

    sys.excepthook = _excepthook
    threading.excepthook = _thread_excepthook
    _hooks_installed = True


__all__ = [
    "OperationalSupport",
    "REDACTED",
    "REDACTED_EMAIL",
    "SupportEvent",
    "TraceIdLogFilter",
    "bind_trace_id",
    "create_trace_id",
    "current_trace_id",
    "get_operational_support",
    "install_global_exception_hooks",
    "redact_text",
    "redact_value",
]
