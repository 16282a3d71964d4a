from __future__ import annotations

from typing import ContextManager, Protocol, runtime_checkable

from whisper_relay.application.ports.key_value_port import KeyValueStorePort


@runtime_checkable
class HostContextPort(Protocol):
    """
    Execution host seen by the relay.

    The host resolves who is calling, how much value the call carries and what
    time it is, moves value between accounts, and owns the durable store. One
    ``atomic()`` block is one invocation: storage writes and transfers made
    inside it are applied together or not at all.
    """

    @property
    def storage(self) -> KeyValueStorePort:
        """Durable store backing the relay state."""

    def caller(self) -> str:
        """Account id of the current invoker."""

    def now(self) -> int:
        """Monotonic timestamp in nanoseconds."""

    def attached_value(self) -> int:
        """Value (smallest units) attached to the current invocation."""

    def transfer(self, to: str, amount: int) -> None:
        """Send value from the relay account to ``to`` within the invocation."""

    def atomic(self) -> ContextManager[None]:
        """Wrap one invocation; rolls back storage and transfers on error."""
