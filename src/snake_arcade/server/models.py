"""Pydantic models for API request/response schemas."""

from __future__ import annotations

import enum
from typing import Literal

from pydantic import BaseModel, Field


class SessionStatus(str, enum.Enum):
    """Lifecycle states for a hosted session."""

    ACTIVE = "active"
    FINISHED = "finished"


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions."""

    grid_width: int | None = Field(default=None, ge=4, le=200)
    grid_height: int | None = Field(default=None, ge=4, le=200)
    initial_speed: int = Field(default=200, ge=50, le=2000)
    scoring: Literal["standard", "classic"] = "standard"
    poison_enabled: bool = True
    seed: int | None = None


class TokenRequest(BaseModel):
    """Request body for player-only actions."""

    token: str


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    status: SessionStatus
    phase: str
    score: int
    speed: int


class CreateSessionResponse(SessionSummary):
    """Response for a newly created session, carrying the player token."""

    token: str


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    detail: str
