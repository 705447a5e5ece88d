"""FastAPI application factory for hosting snake sessions."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from snake_core.server.routes import router
from snake_core.server.session_manager import SessionManager
from snake_core.server.websocket import ws_router


def create_app(
    max_finished_sessions: int = 100,
    idle_timeout: float = 300.0,
) -> FastAPI:
    """Build the application.

    The session registry lives for the lifespan of the app; sessions
    that sit outside PLAYING for *idle_timeout* seconds expire, and at
    most *max_finished_sessions* ended ones are retained.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.session_manager = SessionManager(
            max_finished_sessions=max_finished_sessions,
            idle_timeout=idle_timeout,
        )
        yield
        await app.state.session_manager.cleanup()

    app = FastAPI(
        title="Snake Core Sessions",
        description="Hosted grid snake games: actions in, frames out.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(router)
    app.include_router(ws_router)
    return app
