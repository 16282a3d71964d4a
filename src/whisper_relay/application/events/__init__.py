from .event_schema import (
    EVENT_LOG_PREFIX,
    EVENT_STANDARD,
    EVENT_VERSION,
    EventKind,
    WhisperEventEnvelope,
    make_event,
    parse_event_line,
)
from .emitter import EventEmitter
from .queries import event_accounts, query_events

__all__ = [
    "EVENT_LOG_PREFIX",
    "EVENT_STANDARD",
    "EVENT_VERSION",
    "EventKind",
    "WhisperEventEnvelope",
    "make_event",
    "parse_event_line",
    "EventEmitter",
    "event_accounts",
    "query_events",
]
