"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions."""

    width: int = Field(default=32, ge=1, le=256)
    height: int = Field(default=32, ge=1, le=256)
    initial_length: int = Field(default=10, ge=1)
    move_interval_ms: int = Field(default=50, ge=10, le=2000)
    frame_rate: int = Field(default=60, ge=1, le=240)
    food_avoids_snake: bool = False
    tile_size: int = Field(default=16, ge=1, le=128)
    seed: int | None = None


class ActionRequest(BaseModel):
    """Request body for POST /sessions/{session_id}/actions.

    Either an action name (``"pause"``, ``"up"``) or a bound key name
    (``"2"``, ``"up"``) must be given.
    """

    action: str | None = None
    key: str | None = None


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    state: str
    score: int
    best_score: int
    width: int
    height: int
    frame_rate: int


class ActionResponse(BaseModel):
    """Result of applying one action."""

    accepted: bool
    state: dict
