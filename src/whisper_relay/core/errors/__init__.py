"""
统一错误模块。
"""

from .errors import (
    WhisperError,
    MalformedKeyError,
    InsufficientDepositError,
    UnknownRecipientError,
    UnknownGroupError,
    DuplicateGroupError,
    NoPaymentError,
    AlreadyInitializedError,
    NotInitializedError,
)

__all__ = [
    "WhisperError",
    "MalformedKeyError",
    "InsufficientDepositError",
    "UnknownRecipientError",
    "UnknownGroupError",
    "DuplicateGroupError",
    "NoPaymentError",
    "AlreadyInitializedError",
    "NotInitializedError",
]
