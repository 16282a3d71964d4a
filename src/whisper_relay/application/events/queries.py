"""
Indexer-style queries over an event log.

Backends that keep their own index (SQLAlchemy) answer ``list_events``
directly; anything else that can ``stream`` is scanned in emission order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

if TYPE_CHECKING:
    from whisper_relay.application.ports.event_log_port import EventLogPort


def event_accounts(data: Dict[str, Any]) -> List[str]:
    """Accounts an event is about (sender side first)."""
    accounts = []
    for key in ("from", "account_id", "creator", "to"):
        value = data.get(key)
        if value:
            accounts.append(value)
    return accounts


def query_events(
    event_log: EventLogPort,
    *,
    event: Optional[str] = None,
    account: Optional[str] = None,
    group_id: Optional[str] = None,
    after_seq: int = 0,
    limit: int = 1000,
) -> List[Dict[str, Any]]:
    lister = getattr(event_log, "list_events", None)
    if lister is not None:
        rows = lister(event=event, account=account, group_id=group_id, after_seq=after_seq, limit=limit)
        if rows is not None:
            return rows

    out: List[Dict[str, Any]] = []
    for seq, envelope in enumerate(event_log.stream(), start=1):
        if seq <= after_seq:
            continue
        if event and envelope.get("event") != event:
            continue
        data = envelope.get("data") or {}
        if account and account not in event_accounts(data):
            continue
        if group_id and data.get("group_id") != group_id:
            continue
        out.append({"seq": seq, **envelope})
        if len(out) >= limit:
            break
    return out
