from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Union

from whisper_relay.application.events.event_schema import WhisperEventEnvelope
from whisper_relay.application.ports.event_log_port import EventLogPort

logger = logging.getLogger(__name__)


class CompositeEventLog(EventLogPort):
    """
    Tee events to multiple backends.

    The first backend is primary: its failure propagates to the caller.
    Secondary backends are best-effort.
    """

    def __init__(self, backends: List[EventLogPort]):
        self._backends = [b for b in backends if b is not None]
        if not self._backends:
            raise ValueError("CompositeEventLog needs at least one backend")

    @property
    def backends(self) -> List[EventLogPort]:
        return list(self._backends)

    def append(self, event: Union[WhisperEventEnvelope, dict]) -> None:
        primary, *secondary = self._backends
        primary.append(event)
        for backend in secondary:
            try:
                backend.append(event)
            except Exception as e:
                logger.warning(f"CompositeEventLog secondary append failed: {e}")

    def stream(self, event: Optional[str] = None) -> Iterable[dict]:
        # Prefer the first backend that supports streaming.
        for backend in self._backends:
            it = iter(backend.stream(event))
            first = next(it, None)
            if first is None:
                continue

            def _gen(first=first, it=it):
                yield first
                yield from it

            return _gen()
        return iter(())

    def close(self) -> None:
        for backend in self._backends:
            try:
                backend.close()
            except Exception as e:
                logger.debug(f"CompositeEventLog backend close failed: {e}")

    # ---- Optional convenience API (used by the events route) ----

    def list_events(self, **filters):
        for backend in self._backends:
            if hasattr(backend, "list_events"):
                return backend.list_events(**filters)  # type: ignore[attr-defined]
        return None
