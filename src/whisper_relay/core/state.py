# whisper_relay/core/state.py
"""
目录状态聚合

每次调用从存储载入一次 WhisperState，显式传给各组件，成功时写回。
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

from whisper_relay.application.ports.key_value_port import KeyValueStorePort
from whisper_relay.core.errors import NotInitializedError
from whisper_relay.domain.group import GroupChat
from whisper_relay.domain.profile import MessagingProfile

STATE_KEY = "STATE"
PROFILES_PREFIX = "profiles"
GROUPS_PREFIX = "groups"

V = TypeVar("V")


class LookupMap(Generic[V]):
    """Prefixed view over the key/value store; values are JSON objects."""

    def __init__(
        self,
        storage: KeyValueStorePort,
        prefix: str,
        decode: Callable[[Dict[str, Any]], V],
        encode: Callable[[V], Dict[str, Any]],
    ):
        self._storage = storage
        self._prefix = prefix
        self._decode = decode
        self._encode = encode

    def _key(self, key: str) -> str:
        return f"{self._prefix}:{key}"

    def get(self, key: str) -> Optional[V]:
        raw = self._storage.get(self._key(key))
        if raw is None:
            return None
        return self._decode(json.loads(raw))

    def contains(self, key: str) -> bool:
        return self._storage.contains(self._key(key))

    def insert(self, key: str, value: V) -> None:
        self._storage.put(self._key(key), json.dumps(self._encode(value), ensure_ascii=False))


@dataclass
class WhisperState:
    """Counters plus the two keyed collections."""

    storage: KeyValueStorePort
    owner: str
    profile_count: int = 0
    message_count: int = 0

    @property
    def profiles(self) -> LookupMap[MessagingProfile]:
        return LookupMap(self.storage, PROFILES_PREFIX, MessagingProfile.from_dict, MessagingProfile.to_dict)

    @property
    def groups(self) -> LookupMap[GroupChat]:
        return LookupMap(self.storage, GROUPS_PREFIX, GroupChat.from_dict, GroupChat.to_dict)

    def next_message_id(self) -> int:
        self.message_count += 1
        return self.message_count

    def save(self) -> None:
        self.storage.put(
            STATE_KEY,
            json.dumps(
                {
                    "owner": self.owner,
                    "profile_count": self.profile_count,
                    "message_count": self.message_count,
                }
            ),
        )

    @staticmethod
    def exists(storage: KeyValueStorePort) -> bool:
        return storage.contains(STATE_KEY)

    @classmethod
    def load(cls, storage: KeyValueStorePort) -> "WhisperState":
        raw = storage.get(STATE_KEY)
        if raw is None:
            raise NotInitializedError(message="The contract is not initialized")
        data = json.loads(raw)
        return cls(
            storage=storage,
            owner=data["owner"],
            profile_count=int(data.get("profile_count", 0)),
            message_count=int(data.get("message_count", 0)),
        )
