from __future__ import annotations

import logging
from typing import Optional

from whisper_relay.application.events.emitter import EventEmitter
from whisper_relay.application.events.event_schema import EventKind
from whisper_relay.application.ports.host_port import HostContextPort
from whisper_relay.core.errors import InsufficientDepositError
from whisper_relay.core.state import WhisperState
from whisper_relay.domain.profile import MessagingProfile, decode_pubkey

logger = logging.getLogger(__name__)


class ProfileRegistry:
    """
    Account -> messaging key directory.

    First registration costs a storage deposit and counts a new profile;
    every later registration by the same account rotates the key, bumps the
    version by one and replaces the profile wholesale.
    """

    def __init__(self, host: HostContextPort, emitter: EventEmitter, min_storage_deposit: int):
        self._host = host
        self._emitter = emitter
        self._min_storage_deposit = min_storage_deposit

    def register_key(
        self,
        state: WhisperState,
        x25519_pubkey: str,
        display_name: Optional[str] = None,
    ) -> MessagingProfile:
        account_id = self._host.caller()
        decode_pubkey(x25519_pubkey)

        existing = state.profiles.get(account_id)
        registered_at = self._host.now()

        if existing is None:
            deposit = self._host.attached_value()
            if deposit < self._min_storage_deposit:
                raise InsufficientDepositError(
                    message="Attach at least the storage deposit to register a key",
                    context={"attached": deposit, "required": self._min_storage_deposit},
                )
            state.profile_count += 1
            profile = MessagingProfile(
                x25519_pubkey=x25519_pubkey,
                key_version=1,
                registered_at=registered_at,
                display_name=display_name,
            )
        else:
            profile = existing.rotated(x25519_pubkey, registered_at, display_name)

        state.profiles.insert(account_id, profile)

        self._emitter.emit(
            EventKind.key_registered,
            {
                "account_id": account_id,
                "x25519_pubkey": x25519_pubkey,
                "key_version": profile.key_version,
                "display_name": display_name,
            },
        )
        logger.debug("Registered key v%d for %s", profile.key_version, account_id)
        return profile

    def get_profile(self, state: WhisperState, account_id: str) -> Optional[MessagingProfile]:
        return state.profiles.get(account_id)

    def has_profile(self, state: WhisperState, account_id: str) -> bool:
        return state.profiles.contains(account_id)
