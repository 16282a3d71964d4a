"""
Event emitter.

Envelopes emitted during an invocation are held back and handed to the sink
only when the invocation body finishes without raising, so a rejected call
leaves no trace in the notification stream.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional, Union

from whisper_relay.application.events.event_schema import EventKind, WhisperEventEnvelope, make_event

if TYPE_CHECKING:
    from whisper_relay.application.ports.event_log_port import EventLogPort

logger = logging.getLogger(__name__)


class EventEmitter:
    def __init__(self, sink: EventLogPort):
        self._sink = sink
        self._staged: Optional[List[WhisperEventEnvelope]] = None

    @property
    def sink(self) -> EventLogPort:
        return self._sink

    def emit(self, kind: Union[EventKind, str], data: Dict[str, Any]) -> WhisperEventEnvelope:
        envelope = make_event(kind, data)
        if self._staged is not None:
            self._staged.append(envelope)
        else:
            self._sink.append(envelope)
        return envelope

    @contextmanager
    def staged(self) -> Iterator[None]:
        if self._staged is not None:
            raise RuntimeError("EventEmitter.staged() does not nest")
        self._staged = []
        try:
            yield
            pending = self._staged
        finally:
            self._staged = None
        for envelope in pending:
            self._sink.append(envelope)
        if pending:
            logger.debug("Published %d event(s): %s", len(pending), ",".join(e.event for e in pending))
