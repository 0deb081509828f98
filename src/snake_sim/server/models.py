"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions."""

    grid_width: int = Field(default=20, ge=1, le=200)
    grid_height: int = Field(default=20, ge=1, le=200)
    wall_mode: Literal["wrap", "death"] = "wrap"
    move_delay_ms: int | None = Field(default=150, ge=0, le=2000)
    initial_interval_ms: int = Field(default=150, ge=1, le=5000)
    min_interval_ms: int = Field(default=50, ge=1, le=5000)
    interval_step_ms: int = Field(default=2, ge=0)
    food_value: int = Field(default=10, ge=0)
    spawn_strategy: Literal["enumerate", "sample"] = "enumerate"
    seed: int | None = None
    high_score: int = Field(default=0, ge=0)


class DirectionRequest(BaseModel):
    """Request body for POST /sessions/{session_id}/direction."""

    direction: Literal["up", "down", "left", "right"]


class DirectionResponse(BaseModel):
    session_id: str
    accepted: bool


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    state: str
    score: int
    high_score: int
    grid_width: int
    grid_height: int


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    detail: str
