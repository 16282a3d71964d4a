"""
whisper-relay: X25519 key directory and encrypted message relay.
"""

__version__ = "1.0.0"

__all__ = ["__version__", "WhisperContract", "WhisperError"]


def __getattr__(name):
    if name == "WhisperContract":
        from whisper_relay.core.contract import WhisperContract

        return WhisperContract
    if name == "WhisperError":
        from whisper_relay.core.errors import WhisperError

        return WhisperError
    raise AttributeError(f"module 'whisper_relay' has no attribute {name!r}")
