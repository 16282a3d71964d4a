from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from whisper_relay.api.deps import MAX_KEY_VERSION, CallerContext, get_caller, get_contract, get_host, invoke_as
from whisper_relay.core.contract import WhisperContract
from whisper_relay.infrastructure.host.in_process_host import InProcessHost

router = APIRouter()


class SendMessageRequest(BaseModel):
    to: str = Field(..., min_length=1)
    encrypted_body: str
    nonce: str
    recipient_key_version: int = Field(..., ge=0, le=MAX_KEY_VERSION)
    reply_to: Optional[str] = None


class SendMessageResponse(BaseModel):
    status: str = "sent"
    message_count: int


class PaidMessageResponse(SendMessageResponse):
    transfer: Dict[str, Any]


@router.post("/messages", response_model=SendMessageResponse)
def send_message(
    req: SendMessageRequest,
    caller: CallerContext = Depends(get_caller),
    contract: WhisperContract = Depends(get_contract),
    host: InProcessHost = Depends(get_host),
):
    with invoke_as(contract, host, caller):
        contract.send_message(req.to, req.encrypted_body, req.nonce, req.recipient_key_version, req.reply_to)
        count = contract.get_stats()["message_count"]
    return SendMessageResponse(message_count=count)


@router.post("/messages/paid", response_model=PaidMessageResponse)
def send_message_with_payment(
    req: SendMessageRequest,
    caller: CallerContext = Depends(get_caller),
    contract: WhisperContract = Depends(get_contract),
    host: InProcessHost = Depends(get_host),
):
    with invoke_as(contract, host, caller):
        receipt = contract.send_message_with_payment(
            req.to, req.encrypted_body, req.nonce, req.recipient_key_version, req.reply_to
        )
    return PaidMessageResponse(message_count=receipt.message_id, transfer=receipt.to_dict())
