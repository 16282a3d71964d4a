"""
Whisper Relay API - FastAPI backend over the key directory and message relay.

Caller identity comes from ``X-Whisper-Account``; attached value from
``X-Attached-Deposit`` (integer, smallest units).
"""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from whisper_relay import __version__
from whisper_relay.api.errors import whisper_error_handler
from whisper_relay.api.routes import events, groups, keys, messages, stats
from whisper_relay.application.ports.host_port import HostContextPort
from whisper_relay.config.settings import Settings, create_settings
from whisper_relay.core.contract import WhisperContract
from whisper_relay.core.di.bootstrap import bootstrap_relay
from whisper_relay.core.di.container import Container
from whisper_relay.core.errors import WhisperError


def create_app(settings: Optional[Settings] = None, *, container: Optional[Container] = None) -> FastAPI:
    """
    构建 FastAPI 应用。

    传入 container 时直接复用其中的合约与宿主（测试用）；否则按配置装配一个新容器。
    """
    if container is None:
        container = bootstrap_relay(settings or create_settings(), container=Container())

    app = FastAPI(
        title="Whisper Relay API",
        description="X25519 key directory and end-to-end encrypted message relay",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.container = container
    app.state.contract = container.resolve(WhisperContract)
    app.state.host = container.resolve(HostContextPort)

    app.add_exception_handler(WhisperError, whisper_error_handler)

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "version": __version__}

    app.include_router(keys.router, prefix="/api", tags=["Keys"])
    app.include_router(messages.router, prefix="/api", tags=["Messages"])
    app.include_router(groups.router, prefix="/api", tags=["Groups"])
    app.include_router(stats.router, prefix="/api", tags=["Stats"])
    app.include_router(events.router, prefix="/api", tags=["Events"])

    @app.on_event("shutdown")
    async def _close_backends():
        app.state.contract.event_log.close()
        app.state.host.storage.close()

    return app


if __name__ == "__main__":
    import uvicorn

    _settings = create_settings()
    uvicorn.run(create_app(_settings), host=_settings.api.host, port=_settings.api.port)
