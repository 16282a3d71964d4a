"""
In-process execution host.

Stands in for the ledger runtime: per-thread call context (caller, attached
value, optional pinned timestamp), an atomic invocation block over the
key/value store, and an in-memory balance book for value transfers.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import defaultdict
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional, Tuple

from whisper_relay.application.ports.key_value_port import KeyValueStorePort
from whisper_relay.infrastructure.stores.kv_store import InMemoryKeyValueStore

logger = logging.getLogger(__name__)

ANONYMOUS = "anonymous"


class InProcessHost:
    def __init__(self, storage: Optional[KeyValueStorePort] = None, *, account_id: str = "whisper-relay"):
        self._storage = storage if storage is not None else InMemoryKeyValueStore()
        self.account_id = account_id
        self._balances: Dict[str, int] = defaultdict(int)
        self._ctx = threading.local()
        self._clock_lock = threading.Lock()
        self._invocation_lock = threading.RLock()
        self._last_ts = 0
        self._pending_transfers: Optional[List[Tuple[str, int]]] = None
        self._invocation_ts: Optional[int] = None

    @property
    def storage(self) -> KeyValueStorePort:
        return self._storage

    # ---- call context ----

    def set_context(
        self,
        predecessor: str,
        attached_deposit: int = 0,
        block_timestamp: Optional[int] = None,
    ) -> None:
        """Set the caller context for subsequent calls on this thread."""
        if attached_deposit < 0:
            raise ValueError("attached_deposit cannot be negative")
        self._ctx.predecessor = predecessor
        self._ctx.attached_deposit = attached_deposit
        self._ctx.block_timestamp = block_timestamp

    @contextmanager
    def call(
        self,
        predecessor: str,
        attached_deposit: int = 0,
        block_timestamp: Optional[int] = None,
    ) -> Iterator["InProcessHost"]:
        """Temporarily switch the caller context, restoring the previous one."""
        previous = dict(vars(self._ctx))
        self.set_context(predecessor, attached_deposit, block_timestamp)
        try:
            yield self
        finally:
            self.clear_context()
            vars(self._ctx).update(previous)

    def clear_context(self) -> None:
        """Forget this thread's caller context (back to anonymous, no deposit)."""
        vars(self._ctx).clear()

    def caller(self) -> str:
        return getattr(self._ctx, "predecessor", ANONYMOUS)

    def attached_value(self) -> int:
        return getattr(self._ctx, "attached_deposit", 0)

    def now(self) -> int:
        if self._invocation_ts is not None:
            return self._invocation_ts
        return self._next_timestamp()

    def _next_timestamp(self) -> int:
        pinned = getattr(self._ctx, "block_timestamp", None)
        with self._clock_lock:
            ts = pinned if pinned is not None else max(time.time_ns(), self._last_ts)
            self._last_ts = max(self._last_ts, ts)
            return ts

    # ---- value ----

    def transfer(self, to: str, amount: int) -> None:
        if self._pending_transfers is None:
            raise RuntimeError("transfer() requires an open invocation")
        if amount <= 0:
            raise ValueError("Transfer amount must be positive")
        self._pending_transfers.append((to, amount))

    def fund(self, account_id: str, amount: int) -> None:
        self._balances[account_id] += amount

    def balance_of(self, account_id: str) -> int:
        return self._balances.get(account_id, 0)

    # ---- invocation ----

    @contextmanager
    def atomic(self) -> Iterator[None]:
        # One invocation at a time per host; other threads wait their turn.
        with self._invocation_lock:
            if self._pending_transfers is not None:
                raise RuntimeError("Invocations do not nest")
            self._pending_transfers = []
            self._invocation_ts = self._next_timestamp()
            try:
                with self._storage.transaction():
                    yield
                self._settle(self._pending_transfers)
            finally:
                self._pending_transfers = None
                self._invocation_ts = None

    def _settle(self, transfers: List[Tuple[str, int]]) -> None:
        # Attached value lands on the relay account only for committed calls.
        deposit = self.attached_value()
        if deposit:
            self._balances[self.caller()] -= deposit
            self._balances[self.account_id] += deposit
        for to, amount in transfers:
            self._balances[self.account_id] -= amount
            self._balances[to] += amount
            logger.debug("Transferred %d to %s", amount, to)
