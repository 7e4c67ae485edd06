"""Event bus: decouples the scout runner from its observers.

* Type-safe event types via ``EventType`` enum.
* Multiple sink pattern: a single bus emits to all registered
  ``EventSink`` implementations (JSONL stream, logger, in-memory buffer).
* A failing sink is logged and skipped; it never breaks the scout run.
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Iterator, Protocol, runtime_checkable

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Event types
# ---------------------------------------------------------------------------


class EventType(str, Enum):
    """All event types emitted during a scout run."""

    # Lifecycle
    SCOUT_STARTED = "scout_started"
    SCOUT_FAILED = "scout_failed"

    # Browser session
    SESSION_CREATED = "session_created"
    SESSION_RELEASED = "session_released"
    CLEANUP_FAILED = "cleanup_failed"

    # Extraction
    PAGE_LOADED = "page_loaded"
    EXTRACTION_COMPLETED = "extraction_completed"


# ---------------------------------------------------------------------------
# Event payload model
# ---------------------------------------------------------------------------


class Event(BaseModel):
    """Structured event emitted by the event bus."""

    event_type: EventType
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    scout_id: str = ""
    data: dict[str, Any] = Field(default_factory=dict)

    def to_jsonl(self) -> str:
        """Serialize to a single JSON line (no trailing newline)."""
        return self.model_dump_json()


# ---------------------------------------------------------------------------
# Sink protocol
# ---------------------------------------------------------------------------


@runtime_checkable
class EventSink(Protocol):
    """Protocol for event consumers."""

    async def handle_event(self, event: Event) -> None:
        """Process a single event."""
        ...


# ---------------------------------------------------------------------------
# Built-in sinks
# ---------------------------------------------------------------------------


class LoggingSink:
    """Emit events to the Python logger.

    ``CLEANUP_FAILED`` and ``SCOUT_FAILED`` go out at WARNING, everything
    else at DEBUG.
    """

    _WARN_EVENTS = frozenset({EventType.CLEANUP_FAILED, EventType.SCOUT_FAILED})

    def __init__(self, logger_name: str = "ycscout.events") -> None:
        self._logger = logging.getLogger(logger_name)

    async def handle_event(self, event: Event) -> None:
        """Log the event."""
        level = logging.WARNING if event.event_type in self._WARN_EVENTS else logging.DEBUG
        self._logger.log(
            level,
            "[%s] %s: %s",
            event.scout_id or "?",
            event.event_type.value,
            json.dumps(event.data, default=str)[:200],
        )


class InMemorySink:
    """Collect events in a list (used by tests)."""

    def __init__(self) -> None:
        self.events: list[Event] = []

    async def handle_event(self, event: Event) -> None:
        """Append the event to the in-memory list."""
        self.events.append(event)

    def of_type(self, event_type: EventType) -> list[Event]:
        """Return the collected events of one type, in order."""
        return [e for e in self.events if e.event_type == event_type]

    @property
    def count(self) -> int:
        """Return the number of collected events."""
        return len(self.events)


class JsonlSink:
    """Write events as JSONL lines to a file-like object.

    Usually attached through ``jsonl_file_sink`` with the file named by
    ``logging.events_jsonl_path``.
    """

    def __init__(self, stream: Any) -> None:
        self._stream = stream

    async def handle_event(self, event: Event) -> None:
        """Write one JSON line to the stream."""
        self._stream.write(event.to_jsonl() + "\n")
        if hasattr(self._stream, "flush"):
            self._stream.flush()


# ---------------------------------------------------------------------------
# Event bus
# ---------------------------------------------------------------------------


class EventBus:
    """Central event dispatcher for scout lifecycle events.

    Args:
        scout_id: Optional default scout run ID attached to all events.
    """

    def __init__(self, scout_id: str = "") -> None:
        self._scout_id = scout_id
        self._sinks: list[EventSink] = []

    @property
    def scout_id(self) -> str:
        return self._scout_id

    def bind(self, scout_id: str) -> "EventBus":
        """Return a new bus sharing this bus's sinks but tagged with *scout_id*."""
        bound = EventBus(scout_id=scout_id)
        bound._sinks = list(self._sinks)
        return bound

    # ------------------------------------------------------------------
    # Sink management
    # ------------------------------------------------------------------

    def add_sink(self, sink: EventSink) -> None:
        """Register an event sink."""
        self._sinks.append(sink)

    def remove_sink(self, sink: EventSink) -> None:
        """Remove a previously registered sink."""
        self._sinks = [s for s in self._sinks if s is not sink]

    # ------------------------------------------------------------------
    # Emit
    # ------------------------------------------------------------------

    async def emit(self, event_type: EventType, data: dict[str, Any] | None = None) -> None:
        """Emit an event to all registered sinks.

        Args:
            event_type: The event type.
            data: Optional payload data.
        """
        event = Event(
            event_type=event_type,
            scout_id=self._scout_id,
            data=data or {},
        )

        for sink in self._sinks:
            try:
                await sink.handle_event(event)
            except Exception as exc:
                logger.warning("EventBus sink error (%s): %s", type(sink).__name__, exc)


@contextmanager
def jsonl_file_sink(bus: EventBus, path: Path | None) -> Iterator[JsonlSink | None]:
    """Append *bus* events to *path* as JSONL for the duration of the block.

    Attaches nothing when *path* is ``None``.
    """
    if path is None:
        yield None
        return

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as stream:
        sink = JsonlSink(stream)
        bus.add_sink(sink)
        try:
            yield sink
        finally:
            bus.remove_sink(sink)
