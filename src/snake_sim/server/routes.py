"""REST API route handlers for session lifecycle and input."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from snake_sim.config import GameConfig
from snake_sim.server.models import (
    CreateSessionRequest,
    DirectionRequest,
    DirectionResponse,
    SessionSummary,
)
from snake_sim.snake import Direction

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _get_manager(request: Request):
    return request.app.state.session_manager


@router.post("", status_code=201)
async def create_session(
    body: CreateSessionRequest, request: Request,
) -> SessionSummary:
    """Create a new game session."""
    manager = _get_manager(request)
    fields = body.model_dump(exclude={"high_score"})
    try:
        config = GameConfig(**fields)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    session = manager.create_session(config, high_score=body.high_score)
    return SessionSummary(**session.summary())


@router.get("")
async def list_sessions(request: Request) -> list[SessionSummary]:
    """List sessions that have not ended."""
    return [SessionSummary(**s) for s in _get_manager(request).list_sessions()]


@router.get("/{session_id}")
async def get_session(session_id: str, request: Request) -> dict:
    """Get the current snapshot of a session."""
    try:
        return await _get_manager(request).snapshot(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Session not found.") from exc


@router.post("/{session_id}/start")
async def start_session(session_id: str, request: Request) -> dict:
    """Begin play and attach the session's tick source."""
    try:
        return await _get_manager(request).start(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Session not found.") from exc
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc


@router.post("/{session_id}/pause")
async def toggle_pause(session_id: str, request: Request) -> dict:
    """Toggle between running and paused."""
    try:
        return await _get_manager(request).toggle_pause(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Session not found.") from exc


@router.post("/{session_id}/restart")
async def restart_session(session_id: str, request: Request) -> dict:
    try:
        return await _get_manager(request).restart(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Session not found.") from exc


@router.post("/{session_id}/direction")
async def set_direction(
    session_id: str, body: DirectionRequest, request: Request,
) -> DirectionResponse:
    """Request a turn; rejected requests answer ``accepted: false``."""
    try:
        accepted = await _get_manager(request).set_direction(
            session_id, Direction.parse(body.direction),
        )
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Session not found.") from exc
    return DirectionResponse(session_id=session_id, accepted=accepted)
