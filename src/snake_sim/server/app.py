"""FastAPI application factory for hosted snake sessions."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from snake_sim.server.routes import router
from snake_sim.server.session_manager import SessionManager
from snake_sim.server.websocket import ws_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI):
    manager: SessionManager = app.state.session_manager
    logger.info(
        "Snake Sim server starting (tick source every %d ms).",
        manager.frame_ms,
    )
    yield
    await app.state.session_manager.cleanup()
    logger.info("Snake Sim server stopped.")


def create_app(
    *,
    frame_ms: int = 16,
    max_finished_sessions: int = 100,
) -> FastAPI:
    """Build the application around a fresh :class:`SessionManager`.

    *frame_ms* is how often each session's tick source feeds the engine a
    timestamp; the engine's own interval decides when a move happens.
    Invalid settings raise ``ValueError`` here rather than at startup.
    """
    app = FastAPI(
        title="Snake Sim",
        description="Host tick-driven snake games over REST and WebSocket.",
        version="0.1.0",
        lifespan=_lifespan,
    )
    app.state.session_manager = SessionManager(
        max_finished_sessions=max_finished_sessions, frame_ms=frame_ms,
    )
    app.include_router(router)
    app.include_router(ws_router)
    return app
