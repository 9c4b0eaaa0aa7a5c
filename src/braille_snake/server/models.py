"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field


class DirectionRequest(BaseModel):
    """Request body for POST /game/direction."""

    direction: str = Field(min_length=1, max_length=16)


class DirectionResponse(BaseModel):
    """Whether a turn was queued."""

    direction: str
    accepted: bool


class FrameResponse(BaseModel):
    """Current frame of the running session."""

    text: str
    display_text: str
    grid_text: str
    score: int
    length: int
    episode: int
    paused: bool
    tick_interval_ms: float


class BestScoreResponse(BaseModel):
    """The stored best-score record."""

    score: int
    points: str
    grid_text: str
    display_text: str


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    detail: str
