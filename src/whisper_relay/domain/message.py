"""
瞬态消息：只作为通知发出，目录本身从不持久化消息体。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Payment:
    amount: int  # 最小单位
    token: str = "NEAR"

    def to_dict(self) -> Dict[str, Any]:
        # amount 以十进制字符串发出，避免索引器端的整数精度问题
        return {"amount": str(self.amount), "token": self.token}


@dataclass(frozen=True)
class DirectMessage:
    id: int
    sender: str
    to: str
    encrypted_body: str
    nonce: str
    recipient_key_version: int
    timestamp: int
    reply_to: Optional[str] = None
    payment: Optional[Payment] = None

    def to_event_data(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "from": self.sender,
            "to": self.to,
            "encrypted_body": self.encrypted_body,
            "nonce": self.nonce,
            "recipient_key_version": self.recipient_key_version,
            "reply_to": self.reply_to,
            "timestamp": self.timestamp,
        }
        if self.payment is not None:
            data["payment"] = self.payment.to_dict()
        return data


@dataclass(frozen=True)
class GroupMessage:
    id: int
    group_id: str
    sender: str
    encrypted_body: str
    nonce: str
    group_key_version: int
    timestamp: int

    def to_event_data(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "group_id": self.group_id,
            "from": self.sender,
            "encrypted_body": self.encrypted_body,
            "nonce": self.nonce,
            "group_key_version": self.group_key_version,
            "timestamp": self.timestamp,
        }
