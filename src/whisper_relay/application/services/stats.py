from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from whisper_relay.core.state import WhisperState


@dataclass(frozen=True)
class DirectoryStats:
    profile_count: int
    message_count: int
    owner: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "profile_count": self.profile_count,
            "message_count": self.message_count,
            "owner": self.owner,
        }


def collect_stats(state: WhisperState) -> DirectoryStats:
    return DirectoryStats(
        profile_count=state.profile_count,
        message_count=state.message_count,
        owner=state.owner,
    )
