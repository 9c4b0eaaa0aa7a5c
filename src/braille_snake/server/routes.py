"""REST API route handlers for the running game session."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from braille_snake.controls import direction_for_key
from braille_snake.server.models import (
    BestScoreResponse,
    DirectionRequest,
    DirectionResponse,
    FrameResponse,
)
from braille_snake.server.session import GameSession

router = APIRouter(prefix="/game", tags=["game"])


def _get_session(request: Request) -> GameSession:
    session = getattr(request.app.state, "session", None)
    if session is None:
        raise HTTPException(status_code=503, detail="No game session running.")
    return session


def _frame(session: GameSession) -> FrameResponse:
    payload = session.frame_payload()
    payload.pop("type")
    return FrameResponse(**payload)


@router.get("")
async def get_frame(request: Request) -> FrameResponse:
    """Return the current frame."""
    return _frame(_get_session(request))


@router.post("/direction")
async def change_direction(
    body: DirectionRequest, request: Request,
) -> DirectionResponse:
    """Queue a turn."""
    session = _get_session(request)
    direction = direction_for_key(body.direction)
    if direction is None:
        raise HTTPException(
            status_code=422, detail=f"Unknown direction: {body.direction}.",
        )
    accepted = session.change_direction(direction)
    return DirectionResponse(
        direction=direction.name.lower(), accepted=accepted,
    )


@router.post("/pause")
async def pause(request: Request) -> FrameResponse:
    """Suspend ticking."""
    session = _get_session(request)
    session.pause()
    await session.flush()
    return _frame(session)


@router.post("/resume")
async def resume(request: Request) -> FrameResponse:
    """Resume ticking and redraw."""
    session = _get_session(request)
    session.resume()
    await session.flush()
    return _frame(session)


@router.get("/best")
async def best_score(request: Request) -> BestScoreResponse:
    """Return the best-score record."""
    session = _get_session(request)
    best = session.engine.best
    if best is None:
        raise HTTPException(status_code=404, detail="No best score recorded.")
    return BestScoreResponse(**session.best_payload(best))
