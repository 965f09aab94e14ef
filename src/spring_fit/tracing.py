"""Run trace collection and persistence helpers."""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from spring_fit.exceptions import TraceWriteError


class RunTraceCollector:
    """Collector for structured pipeline stage events."""

    def __init__(self) -> None:
        self._events: list[dict[str, Any]] = []
        self._next_seq = 1
        self._live_sink: Callable[[dict[str, Any]], None] | None = None

    def set_live_sink(self, sink: Callable[[dict[str, Any]], None] | None) -> None:
        """Set optional callback to stream trace events as they are recorded."""
        self._live_sink = sink

    def log(
        self,
        *,
        stage: str,
        action: str,
        status: str = "ok",
        duration_ms: int | None = None,
        details: dict[str, Any] | str | None = None,
    ) -> None:
        """Record a structured trace event."""
        event = {
            "seq": self._next_seq,
            "timestamp": datetime.now(UTC).isoformat(),
            "stage": stage,
            "action": action,
            "status": status,
            "duration_ms": "" if duration_ms is None else duration_ms,
            "details": _serialize_details(details),
        }
        self._events.append(event)
        self._next_seq += 1
        if self._live_sink is not None:
            self._live_sink(dict(event))

    def events(self) -> list[dict[str, Any]]:
        """Return a shallow copy of collected events."""
        return list(self._events)

    def write_json(self, path: Path) -> None:
        """Write trace events as JSON array."""
        payload = json.dumps(self.events(), indent=2, sort_keys=False)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(payload + "\n", encoding="utf-8")
        except OSError as exc:
            raise TraceWriteError(f"Could not write trace {path}: {exc}") from exc


def _serialize_details(details: dict[str, Any] | str | None) -> str:
    if details is None:
        return ""
    if isinstance(details, str):
        return details
    return json.dumps(details, sort_keys=True, default=str)
