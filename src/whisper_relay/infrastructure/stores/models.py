from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class KeyValueEntryModel(Base):
    """Relay state: STATE, profiles:<account>, groups:<group_id>."""

    __tablename__ = "whisper_kv"

    key: Mapped[str] = mapped_column(String(512), primary_key=True)
    value: Mapped[str] = mapped_column(Text, default="")
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)


class EventRecordModel(Base):
    """One committed notification, with denormalized columns for indexer queries."""

    __tablename__ = "whisper_events"

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    event: Mapped[str] = mapped_column(String(64), index=True)

    message_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)
    sender: Mapped[Optional[str]] = mapped_column(String(256), nullable=True, index=True)
    recipient: Mapped[Optional[str]] = mapped_column(String(256), nullable=True, index=True)
    group_id: Mapped[Optional[str]] = mapped_column(String(256), nullable=True, index=True)

    envelope_json: Mapped[str] = mapped_column(Text, default="{}")
    recorded_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))

    def set_envelope(self, envelope: Dict[str, Any]) -> None:
        self.envelope_json = json.dumps(envelope or {}, ensure_ascii=False, separators=(",", ":"))

    def get_envelope(self) -> Dict[str, Any]:
        try:
            return json.loads(self.envelope_json or "{}")
        except Exception:
            return {}
