"""
领域模型：账户公钥档案、群聊元数据、瞬态消息。
"""

from .profile import MessagingProfile, X25519_KEY_BYTES, decode_pubkey
from .group import GroupChat
from .message import DirectMessage, GroupMessage, Payment

__all__ = [
    "MessagingProfile",
    "X25519_KEY_BYTES",
    "decode_pubkey",
    "GroupChat",
    "DirectMessage",
    "GroupMessage",
    "Payment",
]
