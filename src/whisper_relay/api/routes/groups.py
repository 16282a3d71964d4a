from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from whisper_relay.api.deps import MAX_KEY_VERSION, CallerContext, get_caller, get_contract, get_host, invoke_as
from whisper_relay.core.contract import WhisperContract
from whisper_relay.infrastructure.host.in_process_host import InProcessHost

router = APIRouter()


class CreateGroupRequest(BaseModel):
    group_id: str
    name: Optional[str] = None
    member_keys: str = Field(..., description="Opaque JSON map: account -> encrypted group key")


class GroupResponse(BaseModel):
    group: Dict[str, Any]


class SendGroupMessageRequest(BaseModel):
    encrypted_body: str
    nonce: str
    group_key_version: int = Field(..., ge=0, le=MAX_KEY_VERSION)


class GroupMessageResponse(BaseModel):
    status: str = "sent"
    group_id: str
    message_count: int


@router.post("/groups", response_model=GroupResponse)
def create_group(
    req: CreateGroupRequest,
    caller: CallerContext = Depends(get_caller),
    contract: WhisperContract = Depends(get_contract),
    host: InProcessHost = Depends(get_host),
):
    with invoke_as(contract, host, caller):
        contract.create_group(req.group_id, req.name, req.member_keys)
        group = contract.get_group(req.group_id)
    return GroupResponse(group=group.to_dict())


@router.get("/groups/{group_id}", response_model=GroupResponse)
def get_group(group_id: str, contract: WhisperContract = Depends(get_contract)):
    group = contract.get_group(group_id)
    if group is None:
        raise HTTPException(status_code=404, detail="Group not found")
    return GroupResponse(group=group.to_dict())


@router.post("/groups/{group_id}/messages", response_model=GroupMessageResponse)
def send_group_message(
    group_id: str,
    req: SendGroupMessageRequest,
    caller: CallerContext = Depends(get_caller),
    contract: WhisperContract = Depends(get_contract),
    host: InProcessHost = Depends(get_host),
):
    with invoke_as(contract, host, caller):
        contract.send_group_message(group_id, req.encrypted_body, req.nonce, req.group_key_version)
        count = contract.get_stats()["message_count"]
    return GroupMessageResponse(group_id=group_id, message_count=count)
