"""Shared constants and builders for the test suite."""

import base64

STORAGE_DEPOSIT = 10 ** 22
ONE_NEAR = 10 ** 24


def make_key(seed: int = 1, length: int = 32) -> str:
    """Standard base64 of ``length`` bytes, every byte equal to ``seed``."""
    return base64.b64encode(bytes([seed % 256]) * length).decode("ascii")
