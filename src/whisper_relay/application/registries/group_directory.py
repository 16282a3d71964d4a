from __future__ import annotations

import logging
from typing import Optional

from whisper_relay.application.events.emitter import EventEmitter
from whisper_relay.application.events.event_schema import EventKind
from whisper_relay.application.ports.host_port import HostContextPort
from whisper_relay.core.errors import DuplicateGroupError, InsufficientDepositError
from whisper_relay.core.state import WhisperState
from whisper_relay.domain.group import GroupChat

logger = logging.getLogger(__name__)


class GroupDirectory:
    """
    Group id -> creation metadata.

    Membership and per-member group keys live off-host; the encrypted key
    blob is only forwarded in the ``group_created`` notification.
    """

    def __init__(self, host: HostContextPort, emitter: EventEmitter, min_storage_deposit: int):
        self._host = host
        self._emitter = emitter
        self._min_storage_deposit = min_storage_deposit

    def create_group(
        self,
        state: WhisperState,
        group_id: str,
        name: Optional[str],
        member_keys: str,
    ) -> GroupChat:
        creator = self._host.caller()
        deposit = self._host.attached_value()

        if deposit < self._min_storage_deposit:
            raise InsufficientDepositError(
                message="Attach at least the storage deposit to create a group",
                context={"attached": deposit, "required": self._min_storage_deposit},
            )
        if state.groups.contains(group_id):
            raise DuplicateGroupError(message="Group ID already exists", context={"group_id": group_id})

        created_at = self._host.now()
        group = GroupChat(group_id=group_id, creator=creator, created_at=created_at, name=name)
        state.groups.insert(group_id, group)

        self._emitter.emit(
            EventKind.group_created,
            {
                "group_id": group_id,
                "creator": creator,
                "name": name,
                "member_keys": member_keys,
                "timestamp": created_at,
            },
        )
        logger.debug("Group %s created by %s", group_id, creator)
        return group

    def get_group(self, state: WhisperState, group_id: str) -> Optional[GroupChat]:
        return state.groups.get(group_id)
