from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from whisper_relay.api.deps import CallerContext, get_caller, get_contract, get_host, invoke_as
from whisper_relay.core.contract import WhisperContract
from whisper_relay.infrastructure.host.in_process_host import InProcessHost

router = APIRouter()


class RegisterKeyRequest(BaseModel):
    x25519_pubkey: str = Field(..., description="Standard base64 of a 32-byte X25519 public key")
    display_name: Optional[str] = None


class ProfileResponse(BaseModel):
    account_id: str
    profile: Dict[str, Any]


class ProfileExistsResponse(BaseModel):
    account_id: str
    exists: bool


@router.post("/keys", response_model=ProfileResponse)
def register_key(
    req: RegisterKeyRequest,
    caller: CallerContext = Depends(get_caller),
    contract: WhisperContract = Depends(get_contract),
    host: InProcessHost = Depends(get_host),
):
    with invoke_as(contract, host, caller):
        contract.register_key(req.x25519_pubkey, req.display_name)
        profile = contract.get_profile(caller.account)
    return ProfileResponse(account_id=caller.account, profile=profile.to_dict())


@router.get("/profiles/{account_id}", response_model=ProfileResponse)
def get_profile(account_id: str, contract: WhisperContract = Depends(get_contract)):
    profile = contract.get_profile(account_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return ProfileResponse(account_id=account_id, profile=profile.to_dict())


@router.get("/profiles/{account_id}/exists", response_model=ProfileExistsResponse)
def has_profile(account_id: str, contract: WhisperContract = Depends(get_contract)):
    return ProfileExistsResponse(account_id=account_id, exists=contract.has_profile(account_id))
