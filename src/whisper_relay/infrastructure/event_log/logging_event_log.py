from __future__ import annotations

import logging
from typing import Iterable, Optional, Union

from whisper_relay.application.events.event_schema import WhisperEventEnvelope
from whisper_relay.application.ports.event_log_port import EventLogPort


class LoggingEventLog(EventLogPort):
    """
    Emit each envelope as one ``EVENT_JSON:{...}`` line on the Python logger.

    This is the wire format external indexers tail.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.INFO):
        self._logger = logger or logging.getLogger("whisper.events")
        self._level = level

    def append(self, event: Union[WhisperEventEnvelope, dict]) -> None:
        if not isinstance(event, WhisperEventEnvelope):
            event = WhisperEventEnvelope.from_dict(event)
        self._logger.log(self._level, event.to_log_line())

    def stream(self, event: Optional[str] = None) -> Iterable[dict]:
        # Logging backend cannot stream retrospectively.
        return iter(())

    def close(self) -> None:
        return None
