"""
账户消息档案（X25519 公钥 + 版本）
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import Any, Dict, Optional

from whisper_relay.core.errors import MalformedKeyError

X25519_KEY_BYTES = 32


def decode_pubkey(encoded: str) -> bytes:
    """Decode a canonical standard-alphabet base64 key and require exactly 32 bytes."""
    if not isinstance(encoded, str):
        raise MalformedKeyError(message="Invalid base64 pubkey", context={"pubkey": repr(encoded)})
    try:
        raw = base64.b64decode(encoded.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError, ValueError):
        raise MalformedKeyError(message="Invalid base64 pubkey", context={"pubkey": encoded})
    # 末尾填充位必须为 0：同一把公钥只接受一种编码
    if base64.b64encode(raw).decode("ascii") != encoded:
        raise MalformedKeyError(message="Invalid base64 pubkey", context={"pubkey": encoded})
    if len(raw) != X25519_KEY_BYTES:
        raise MalformedKeyError(
            message=f"X25519 pubkey must be {X25519_KEY_BYTES} bytes",
            context={"pubkey": encoded, "length": len(raw)},
        )
    return raw


@dataclass
class MessagingProfile:
    """一个账户当前发布的消息公钥"""

    x25519_pubkey: str
    key_version: int
    registered_at: int  # 宿主时间戳（纳秒）
    display_name: Optional[str] = None

    def __post_init__(self):
        if self.key_version < 1:
            raise ValueError("key_version starts at 1")

    def rotated(self, x25519_pubkey: str, registered_at: int, display_name: Optional[str]) -> "MessagingProfile":
        """整体替换：新公钥、版本 +1，display_name 不做合并。"""
        return MessagingProfile(
            x25519_pubkey=x25519_pubkey,
            key_version=self.key_version + 1,
            registered_at=registered_at,
            display_name=display_name,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x25519_pubkey": self.x25519_pubkey,
            "key_version": self.key_version,
            "registered_at": self.registered_at,
            "display_name": self.display_name,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MessagingProfile":
        return cls(
            x25519_pubkey=data["x25519_pubkey"],
            key_version=int(data["key_version"]),
            registered_at=int(data["registered_at"]),
            display_name=data.get("display_name"),
        )
