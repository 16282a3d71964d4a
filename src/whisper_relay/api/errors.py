from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse

from whisper_relay.core.errors import WhisperError

STATUS_BY_CODE = {
    "MALFORMED_KEY": 400,
    "INSUFFICIENT_DEPOSIT": 402,
    "NO_PAYMENT": 402,
    "UNKNOWN_RECIPIENT": 404,
    "UNKNOWN_GROUP": 404,
    "DUPLICATE_GROUP": 409,
    "ALREADY_INITIALIZED": 409,
    "NOT_INITIALIZED": 503,
}


def status_for(error: WhisperError) -> int:
    return STATUS_BY_CODE.get(error.code, 400)


async def whisper_error_handler(request: Request, exc: WhisperError) -> JSONResponse:
    return JSONResponse(
        status_code=status_for(exc),
        content={"error": exc.code, "message": exc.message, "context": exc.context or {}},
    )
