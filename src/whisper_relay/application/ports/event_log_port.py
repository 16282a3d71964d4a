from __future__ import annotations

from typing import Protocol, runtime_checkable, Iterable, Optional, Union

from whisper_relay.application.events.event_schema import WhisperEventEnvelope


@runtime_checkable
class EventLogPort(Protocol):
    """
    Notification sink.

    Receives one envelope per committed state-changing call. Implementations
    may log a structured line, keep records in memory, or persist for indexers.
    """

    def append(self, event: Union[WhisperEventEnvelope, dict]) -> None:
        """Append an event (envelope)."""

    def stream(self, event: Optional[str] = None) -> Iterable[dict]:
        """
        Stream envelopes in emission order, optionally filtered by event kind.

        Sinks that cannot replay return an empty iterator.
        """

    def close(self) -> None:
        """Close underlying resources (optional)."""
