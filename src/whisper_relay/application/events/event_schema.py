from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Union

EVENT_STANDARD = "whisper"
EVENT_VERSION = "1.0.0"
EVENT_LOG_PREFIX = "EVENT_JSON:"


class EventKind(str, Enum):
    key_registered = "key_registered"
    message = "message"
    group_created = "group_created"
    group_message = "group_message"


def _canonical(value: Any) -> Any:
    # Indexers were built against a serializer that orders object keys.
    if isinstance(value, dict):
        return {k: _canonical(value[k]) for k in sorted(value)}
    if isinstance(value, list):
        return [_canonical(v) for v in value]
    return value


@dataclass
class WhisperEventEnvelope:
    """
    Notification envelope consumed by off-host indexers.

    Envelope fields keep their declared order; ``data`` keys are sorted.
    """

    event: str
    data: Dict[str, Any] = field(default_factory=dict)
    standard: str = EVENT_STANDARD
    version: str = EVENT_VERSION

    def to_dict(self) -> Dict[str, Any]:
        return {
            "standard": self.standard,
            "version": self.version,
            "event": self.event,
            "data": _canonical(self.data),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"))

    def to_log_line(self) -> str:
        return EVENT_LOG_PREFIX + self.to_json()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WhisperEventEnvelope":
        return cls(
            event=data["event"],
            data=dict(data.get("data") or {}),
            standard=data.get("standard", EVENT_STANDARD),
            version=data.get("version", EVENT_VERSION),
        )


def make_event(kind: Union[EventKind, str], data: Dict[str, Any]) -> WhisperEventEnvelope:
    event = kind.value if isinstance(kind, EventKind) else str(kind)
    return WhisperEventEnvelope(event=event, data=dict(data))


def parse_event_line(line: str) -> WhisperEventEnvelope:
    """Inverse of ``to_log_line``; raises ValueError on foreign lines."""
    if not line.startswith(EVENT_LOG_PREFIX):
        raise ValueError(f"Not an event line: {line[:40]!r}")
    return WhisperEventEnvelope.from_dict(json.loads(line[len(EVENT_LOG_PREFIX):]))
