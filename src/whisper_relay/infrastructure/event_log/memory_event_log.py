from __future__ import annotations

from typing import Iterable, List, Optional, Union

from whisper_relay.application.events.event_schema import WhisperEventEnvelope
from whisper_relay.application.ports.event_log_port import EventLogPort


class InMemoryEventLog(EventLogPort):
    """Simple in-memory event log (useful for tests)."""

    def __init__(self) -> None:
        self.events: List[dict] = []
        self.lines: List[str] = []

    def append(self, event: Union[WhisperEventEnvelope, dict]) -> None:
        if not isinstance(event, WhisperEventEnvelope):
            event = WhisperEventEnvelope.from_dict(event)
        self.events.append(event.to_dict())
        self.lines.append(event.to_log_line())

    def stream(self, event: Optional[str] = None) -> Iterable[dict]:
        return (e for e in self.events if event is None or e.get("event") == event)

    def close(self) -> None:
        return None
