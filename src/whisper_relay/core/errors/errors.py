"""
统一错误定义：每个失败都是调用前置校验失败，抛出即整笔调用被拒绝，不留任何状态。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class WhisperError(Exception):
    message: str
    code: str = "UNKNOWN"
    context: Dict[str, Any] | None = None

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


@dataclass
class MalformedKeyError(WhisperError):
    code: str = "MALFORMED_KEY"


@dataclass
class InsufficientDepositError(WhisperError):
    code: str = "INSUFFICIENT_DEPOSIT"


@dataclass
class UnknownRecipientError(WhisperError):
    code: str = "UNKNOWN_RECIPIENT"


@dataclass
class UnknownGroupError(WhisperError):
    code: str = "UNKNOWN_GROUP"


@dataclass
class DuplicateGroupError(WhisperError):
    code: str = "DUPLICATE_GROUP"


@dataclass
class NoPaymentError(WhisperError):
    code: str = "NO_PAYMENT"


@dataclass
class AlreadyInitializedError(WhisperError):
    code: str = "ALREADY_INITIALIZED"


@dataclass
class NotInitializedError(WhisperError):
    """目录尚未 new()，对应链上合约的 PanicOnDefault。"""

    code: str = "NOT_INITIALIZED"
