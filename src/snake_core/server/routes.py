"""REST API route handlers for hosted game sessions."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from snake_core.controls import Action, action_for_key, parse_action
from snake_core.server.models import (
    ActionRequest,
    ActionResponse,
    CreateSessionRequest,
    SessionSummary,
)

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _get_manager(request: Request):
    return request.app.state.session_manager


def resolve_action(action: str | None, key: str | None) -> Action | None:
    """Map an action name or a bound key name to an :class:`Action`."""
    if action is not None:
        return parse_action(action)
    if key is not None:
        return action_for_key(key)
    return None


@router.post("", status_code=201)
async def create_session(
    body: CreateSessionRequest, request: Request,
) -> SessionSummary:
    """Create a new session waiting in the menu."""
    manager = _get_manager(request)
    try:
        session = manager.create_session(
            width=body.width,
            height=body.height,
            initial_length=body.initial_length,
            move_interval_ms=body.move_interval_ms,
            frame_rate=body.frame_rate,
            food_avoids_snake=body.food_avoids_snake,
            tile_size=body.tile_size,
            seed=body.seed,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return session.summary()


@router.get("")
async def list_sessions(request: Request) -> list[SessionSummary]:
    """List sessions that have not ended."""
    return _get_manager(request).list_sessions()


@router.get("/{session_id}")
async def get_session(session_id: str, request: Request) -> dict:
    """Get session metadata and the full game state."""
    session = _get_manager(request).get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found.")
    return {
        "session_id": session.session_id,
        "frame_rate": session.frame_rate,
        "state": session.engine.get_state(),
    }


@router.post("/{session_id}/actions")
async def post_action(
    session_id: str, body: ActionRequest, request: Request,
) -> ActionResponse:
    """Deliver one input action to the session."""
    action = resolve_action(body.action, body.key)
    if action is None:
        raise HTTPException(status_code=422, detail="Unknown action or key.")
    try:
        accepted, state = await _get_manager(request).apply_action(
            session_id, action,
        )
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return ActionResponse(accepted=accepted, state=state)


@router.get("/{session_id}/frame")
async def get_frame(session_id: str, request: Request) -> dict:
    """Return frame size and per-tile cell tags for rendering."""
    try:
        return _get_manager(request).frame(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.delete("/{session_id}", status_code=204)
async def delete_session(session_id: str, request: Request) -> None:
    """Stop and remove a session."""
    try:
        await _get_manager(request).delete_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
