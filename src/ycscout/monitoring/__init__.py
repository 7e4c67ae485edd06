"""Scout lifecycle events and their sinks.

Usage::

    from ycscout.monitoring.event_bus import EventBus, EventType, LoggingSink

    bus = EventBus(scout_id="abc123")
    bus.add_sink(LoggingSink())
    await bus.emit(EventType.SCOUT_STARTED, {"query": "fintech"})
"""

from ycscout.monitoring.event_bus import (
    Event,
    EventBus,
    EventSink,
    EventType,
    InMemorySink,
    JsonlSink,
    LoggingSink,
    jsonl_file_sink,
)

__all__ = ["Event", "EventBus", "EventSink", "EventType", "InMemorySink", "JsonlSink", "LoggingSink", "jsonl_file_sink"]
