from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from whisper_relay.api.deps import get_contract
from whisper_relay.core.contract import WhisperContract

router = APIRouter()


class StatsResponse(BaseModel):
    profile_count: int
    message_count: int
    owner: str


@router.get("/stats", response_model=StatsResponse)
def get_stats(contract: WhisperContract = Depends(get_contract)):
    return StatsResponse(**contract.get_stats())
