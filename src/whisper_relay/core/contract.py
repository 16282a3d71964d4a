"""
WhisperContract: the single serialization point of the relay.

Every mutating call runs under one re-entrant lock and one host invocation:
the state aggregate is loaded, handed to the owning component, and written
back only if the component returns normally. Staged notifications are
published once the storage commit and value transfers have gone through;
a failed commit drops them. A sink failure after commit surfaces to the
caller while the committed state stands.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from whisper_relay.application.events.emitter import EventEmitter
from whisper_relay.application.ports.event_log_port import EventLogPort
from whisper_relay.application.ports.host_port import HostContextPort
from whisper_relay.application.registries.group_directory import GroupDirectory
from whisper_relay.application.registries.profile_registry import ProfileRegistry
from whisper_relay.application.services.relay_dispatcher import RelayDispatcher, TransferReceipt
from whisper_relay.application.services.stats import collect_stats
from whisper_relay.config.settings import RelayConfig
from whisper_relay.core.errors import AlreadyInitializedError, NotInitializedError, WhisperError
from whisper_relay.core.state import WhisperState
from whisper_relay.domain.group import GroupChat
from whisper_relay.domain.profile import MessagingProfile

logger = logging.getLogger(__name__)


class WhisperContract:
    def __init__(
        self,
        host: HostContextPort,
        event_log: Optional[EventLogPort] = None,
        config: Optional[RelayConfig] = None,
    ):
        if event_log is None:
            from whisper_relay.infrastructure.event_log.logging_event_log import LoggingEventLog

            event_log = LoggingEventLog()
        self._host = host
        self._config = config or RelayConfig()
        self._emitter = EventEmitter(event_log)
        self._lock = threading.RLock()

        self._profiles = ProfileRegistry(host, self._emitter, self._config.min_storage_deposit)
        self._groups = GroupDirectory(host, self._emitter, self._config.min_storage_deposit)
        self._relay = RelayDispatcher(host, self._emitter, self._config.token_symbol)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    @classmethod
    def new(
        cls,
        host: HostContextPort,
        event_log: Optional[EventLogPort] = None,
        config: Optional[RelayConfig] = None,
    ) -> "WhisperContract":
        """Initialize fresh state owned by the current caller. Valid once per store."""
        with host.atomic():
            if WhisperState.exists(host.storage):
                raise AlreadyInitializedError(message="The contract has already been initialized")
            WhisperState(storage=host.storage, owner=host.caller()).save()
        logger.info("Whisper directory initialized by %s", host.caller())
        return cls(host, event_log, config)

    @classmethod
    def load(
        cls,
        host: HostContextPort,
        event_log: Optional[EventLogPort] = None,
        config: Optional[RelayConfig] = None,
    ) -> "WhisperContract":
        """Attach to an already initialized store."""
        if not WhisperState.exists(host.storage):
            raise NotInitializedError(message="The contract is not initialized")
        return cls(host, event_log, config)

    @property
    def host(self) -> HostContextPort:
        return self._host

    @property
    def event_log(self) -> EventLogPort:
        return self._emitter.sink

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    @contextmanager
    def _invocation(self, operation: str) -> Iterator[WhisperState]:
        with self._lock:
            try:
                # Notifications leave only after the host has committed.
                with self._emitter.staged(), self._host.atomic():
                    state = WhisperState.load(self._host.storage)
                    yield state
                    state.save()
            except WhisperError as e:
                logger.debug("%s rejected for %s: %s", operation, self._host.caller(), e)
                raise

    def _snapshot(self) -> WhisperState:
        return WhisperState.load(self._host.storage)

    # =========================================================================
    # Key registration
    # =========================================================================

    def register_key(self, x25519_pubkey: str, display_name: Optional[str] = None) -> None:
        """Register or rotate the caller's X25519 key (deposit on first registration)."""
        with self._invocation("register_key") as state:
            self._profiles.register_key(state, x25519_pubkey, display_name)

    # =========================================================================
    # Messaging (event-based, nothing stored)
    # =========================================================================

    def send_message(
        self,
        to: str,
        encrypted_body: str,
        nonce: str,
        recipient_key_version: int,
        reply_to: Optional[str] = None,
    ) -> None:
        with self._invocation("send_message") as state:
            self._relay.send_message(state, to, encrypted_body, nonce, recipient_key_version, reply_to)

    def send_message_with_payment(
        self,
        to: str,
        encrypted_body: str,
        nonce: str,
        recipient_key_version: int,
        reply_to: Optional[str] = None,
    ) -> TransferReceipt:
        """Message and attached value are released together or not at all."""
        with self._invocation("send_message_with_payment") as state:
            return self._relay.send_message_with_payment(
                state, to, encrypted_body, nonce, recipient_key_version, reply_to
            )

    # =========================================================================
    # Group chats
    # =========================================================================

    def create_group(self, group_id: str, name: Optional[str], member_keys: str) -> None:
        """``member_keys`` is an opaque JSON map account -> encrypted group key."""
        with self._invocation("create_group") as state:
            self._groups.create_group(state, group_id, name, member_keys)

    def send_group_message(
        self,
        group_id: str,
        encrypted_body: str,
        nonce: str,
        group_key_version: int,
    ) -> None:
        with self._invocation("send_group_message") as state:
            self._relay.send_group_message(state, group_id, encrypted_body, nonce, group_key_version)

    # =========================================================================
    # View methods
    # =========================================================================

    def get_profile(self, account_id: str) -> Optional[MessagingProfile]:
        with self._lock:
            return self._profiles.get_profile(self._snapshot(), account_id)

    def has_profile(self, account_id: str) -> bool:
        with self._lock:
            return self._profiles.has_profile(self._snapshot(), account_id)

    def get_group(self, group_id: str) -> Optional[GroupChat]:
        with self._lock:
            return self._groups.get_group(self._snapshot(), group_id)

    def get_stats(self) -> Dict[str, Any]:
        with self._lock:
            return collect_stats(self._snapshot()).to_dict()
