from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from whisper_relay.api.deps import get_contract
from whisper_relay.application.events.queries import query_events
from whisper_relay.core.contract import WhisperContract

router = APIRouter()


class EventListResponse(BaseModel):
    events: List[Dict[str, Any]]


@router.get("/events", response_model=EventListResponse)
def list_events(
    event: Optional[str] = Query(None, description="key_registered | message | group_created | group_message"),
    account: Optional[str] = None,
    group_id: Optional[str] = None,
    after_seq: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    contract: WhisperContract = Depends(get_contract),
):
    rows = query_events(
        contract.event_log,
        event=event,
        account=account,
        group_id=group_id,
        after_seq=after_seq,
        limit=limit,
    )
    return EventListResponse(events=rows)
