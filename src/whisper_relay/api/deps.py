"""
Request-scoped dependencies: the contract instance and the caller context
taken from headers.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from fastapi import Header, HTTPException, Request

from whisper_relay.core.contract import WhisperContract
from whisper_relay.infrastructure.host.in_process_host import InProcessHost

ACCOUNT_HEADER = "X-Whisper-Account"
DEPOSIT_HEADER = "X-Attached-Deposit"

# Key versions are unsigned 32-bit on the ledger side.
MAX_KEY_VERSION = 2 ** 32 - 1


@dataclass(frozen=True)
class CallerContext:
    account: str
    attached_deposit: int = 0


def get_contract(request: Request) -> WhisperContract:
    contract = getattr(request.app.state, "contract", None)
    if contract is None:
        raise HTTPException(status_code=503, detail="Relay is not initialized")
    return contract


def get_host(request: Request) -> InProcessHost:
    return request.app.state.host


def get_caller(
    account: str = Header(..., alias=ACCOUNT_HEADER, min_length=1),
    attached_deposit: str = Header("0", alias=DEPOSIT_HEADER),
) -> CallerContext:
    # Amounts exceed 64 bits (10^24 per token), so parse as plain digits.
    if not attached_deposit.strip().isdigit():
        raise HTTPException(status_code=400, detail=f"{DEPOSIT_HEADER} must be a non-negative integer")
    return CallerContext(account=account, attached_deposit=int(attached_deposit.strip()))


@contextmanager
def invoke_as(contract: WhisperContract, host: InProcessHost, caller: CallerContext) -> Iterator[None]:
    """Run contract calls as ``caller`` on this worker thread."""
    with contract.lock, host.call(caller.account, caller.attached_deposit):
        yield
