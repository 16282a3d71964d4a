"""
Relay dispatcher: validates the target, stamps the next global message id
and emits the ciphertext as a notification. Nothing about a message is
stored; only the shared counter moves.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from whisper_relay.application.events.emitter import EventEmitter
from whisper_relay.application.events.event_schema import EventKind
from whisper_relay.application.ports.host_port import HostContextPort
from whisper_relay.core.errors import NoPaymentError, UnknownGroupError, UnknownRecipientError
from whisper_relay.core.state import WhisperState
from whisper_relay.domain.message import DirectMessage, GroupMessage, Payment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransferReceipt:
    """Value forwarded alongside a paid message."""

    message_id: int
    to: str
    amount: int
    token: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message_id": self.message_id,
            "to": self.to,
            "amount": str(self.amount),
            "token": self.token,
        }


class RelayDispatcher:
    def __init__(self, host: HostContextPort, emitter: EventEmitter, token_symbol: str = "NEAR"):
        self._host = host
        self._emitter = emitter
        self._token_symbol = token_symbol

    def _require_recipient(self, state: WhisperState, to: str) -> None:
        if not state.profiles.contains(to):
            raise UnknownRecipientError(
                message="Recipient has no registered messaging key",
                context={"to": to},
            )

    def send_message(
        self,
        state: WhisperState,
        to: str,
        encrypted_body: str,
        nonce: str,
        recipient_key_version: int,
        reply_to: Optional[str] = None,
    ) -> DirectMessage:
        sender = self._host.caller()
        self._require_recipient(state, to)

        message = DirectMessage(
            id=state.next_message_id(),
            sender=sender,
            to=to,
            encrypted_body=encrypted_body,
            nonce=nonce,
            recipient_key_version=recipient_key_version,
            timestamp=self._host.now(),
            reply_to=reply_to,
        )
        self._emitter.emit(EventKind.message, message.to_event_data())
        logger.debug("Relayed message #%d %s -> %s", message.id, sender, to)
        return message

    def send_message_with_payment(
        self,
        state: WhisperState,
        to: str,
        encrypted_body: str,
        nonce: str,
        recipient_key_version: int,
        reply_to: Optional[str] = None,
    ) -> TransferReceipt:
        sender = self._host.caller()
        amount = self._host.attached_value()

        if amount <= 0:
            raise NoPaymentError(message="Must attach tokens for payment message")
        self._require_recipient(state, to)

        payment = Payment(amount=amount, token=self._token_symbol)
        message = DirectMessage(
            id=state.next_message_id(),
            sender=sender,
            to=to,
            encrypted_body=encrypted_body,
            nonce=nonce,
            recipient_key_version=recipient_key_version,
            timestamp=self._host.now(),
            reply_to=reply_to,
            payment=payment,
        )
        self._emitter.emit(EventKind.message, message.to_event_data())
        # Same invocation as the emit: both are discarded if the call fails.
        self._host.transfer(to, amount)
        logger.debug("Relayed paid message #%d %s -> %s (%d)", message.id, sender, to, amount)
        return TransferReceipt(message_id=message.id, to=to, amount=amount, token=payment.token)

    def send_group_message(
        self,
        state: WhisperState,
        group_id: str,
        encrypted_body: str,
        nonce: str,
        group_key_version: int,
    ) -> GroupMessage:
        sender = self._host.caller()

        if not state.groups.contains(group_id):
            raise UnknownGroupError(message="Group does not exist", context={"group_id": group_id})

        message = GroupMessage(
            id=state.next_message_id(),
            group_id=group_id,
            sender=sender,
            encrypted_body=encrypted_body,
            nonce=nonce,
            group_key_version=group_key_version,
            timestamp=self._host.now(),
        )
        self._emitter.emit(EventKind.group_message, message.to_event_data())
        logger.debug("Relayed group message #%d to %s", message.id, group_id)
        return message
