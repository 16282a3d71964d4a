from __future__ import annotations

from typing import ContextManager, Optional, Protocol, runtime_checkable


@runtime_checkable
class KeyValueStorePort(Protocol):
    """
    Durable string key/value storage with all-or-nothing transactions.

    Writes made inside ``transaction()`` are visible to reads in the same
    transaction and become durable only when the block exits cleanly; any
    exception discards them. Writes outside a transaction are rejected.
    """

    def get(self, key: str) -> Optional[str]:
        """Return the stored value or None."""

    def put(self, key: str, value: str) -> None:
        """Stage a write in the current transaction."""

    def contains(self, key: str) -> bool:
        """Whether the key has a value."""

    def transaction(self) -> ContextManager[None]:
        """Open an atomic unit of work."""

    def close(self) -> None:
        """Release resources (optional)."""
