from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Union

from sqlalchemy import asc, or_, select

from whisper_relay.application.events.event_schema import WhisperEventEnvelope
from whisper_relay.application.ports.event_log_port import EventLogPort
from whisper_relay.infrastructure.stores.models import EventRecordModel
from whisper_relay.infrastructure.stores.sqlalchemy_db import SessionProvider

logger = logging.getLogger(__name__)


class SqlAlchemyEventLog(EventLogPort):
    """
    Persist envelopes for indexer-style replay.

    - append(): insert one row per envelope, with sender/recipient/group columns
    - stream(event): yield envelopes in emission order
    - list_events(): filtered, bounded queries
    """

    def __init__(self, db_url: Optional[str] = None, *, auto_create_schema: bool = True):
        self._provider = SessionProvider(db_url, auto_create_schema=auto_create_schema)
        self.db_url = self._provider.db_url

    def append(self, event: Union[WhisperEventEnvelope, dict]) -> None:
        if not isinstance(event, WhisperEventEnvelope):
            event = WhisperEventEnvelope.from_dict(event)
        data = event.data

        sender = data.get("from") or data.get("account_id") or data.get("creator")
        message_id = data.get("id")

        with self._provider.session_scope() as session:
            row = EventRecordModel(
                event=event.event,
                message_id=int(message_id) if message_id is not None else None,
                sender=sender,
                recipient=data.get("to"),
                group_id=data.get("group_id"),
                recorded_at=datetime.now(timezone.utc),
            )
            row.set_envelope(event.to_dict())
            session.add(row)

    def stream(self, event: Optional[str] = None) -> Iterable[dict]:
        with self._provider.session() as session:
            stmt = select(EventRecordModel)
            if event:
                stmt = stmt.where(EventRecordModel.event == event)
            rows = session.execute(stmt.order_by(asc(EventRecordModel.seq))).scalars()
            for row in rows:
                yield row.get_envelope()

    def list_events(
        self,
        *,
        event: Optional[str] = None,
        account: Optional[str] = None,
        group_id: Optional[str] = None,
        after_seq: int = 0,
        limit: int = 1000,
    ) -> List[Dict[str, Any]]:
        with self._provider.session() as session:
            stmt = select(EventRecordModel).where(EventRecordModel.seq > after_seq)
            if event:
                stmt = stmt.where(EventRecordModel.event == event)
            if account:
                stmt = stmt.where(or_(EventRecordModel.sender == account, EventRecordModel.recipient == account))
            if group_id:
                stmt = stmt.where(EventRecordModel.group_id == group_id)
            stmt = stmt.order_by(asc(EventRecordModel.seq)).limit(limit)
            rows = session.execute(stmt).scalars()
            return [{"seq": row.seq, **row.get_envelope()} for row in rows]

    def close(self) -> None:
        try:
            self._provider.dispose()
        except Exception as e:
            logger.debug(f"SqlAlchemyEventLog dispose failed: {e}")
