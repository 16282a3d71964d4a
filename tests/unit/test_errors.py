"""
错误处理单元测试
"""

import pytest

from whisper_relay.core.errors import (
    AlreadyInitializedError,
    DuplicateGroupError,
    InsufficientDepositError,
    MalformedKeyError,
    NoPaymentError,
    NotInitializedError,
    UnknownGroupError,
    UnknownRecipientError,
    WhisperError,
)


class TestWhisperError:
    """WhisperError 测试"""

    def test_error_str(self):
        err = WhisperError(message="Test error", code="TEST")
        assert str(err) == "[TEST] Test error"

    def test_error_with_context(self):
        err = WhisperError(message="Failed", context={"key": "value"})
        assert err.code == "UNKNOWN"
        assert err.context == {"key": "value"}

    def test_can_be_raised_and_caught(self):
        with pytest.raises(WhisperError) as exc_info:
            raise WhisperError(message="boom")
        assert exc_info.value.message == "boom"


@pytest.mark.parametrize(
    "cls, code",
    [
        (MalformedKeyError, "MALFORMED_KEY"),
        (InsufficientDepositError, "INSUFFICIENT_DEPOSIT"),
        (UnknownRecipientError, "UNKNOWN_RECIPIENT"),
        (UnknownGroupError, "UNKNOWN_GROUP"),
        (DuplicateGroupError, "DUPLICATE_GROUP"),
        (NoPaymentError, "NO_PAYMENT"),
        (AlreadyInitializedError, "ALREADY_INITIALIZED"),
        (NotInitializedError, "NOT_INITIALIZED"),
    ],
)
def test_subclass_codes(cls, code):
    err = cls(message="x")
    assert isinstance(err, WhisperError)
    assert err.code == code
    assert str(err) == f"[{code}] x"
