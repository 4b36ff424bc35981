"""REST API route handlers for session lifecycle management."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from snake_arcade.server.models import (
    CreateSessionRequest,
    CreateSessionResponse,
    ErrorResponse,
    SessionSummary,
    TokenRequest,
)

router = APIRouter(prefix="/sessions", tags=["sessions"])

_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Unknown session."}}
_FORBIDDEN = {403: {"model": ErrorResponse, "description": "Wrong token."}}


def _get_manager(request: Request):
    return request.app.state.session_manager


@router.post(
    "",
    status_code=201,
    responses={
        422: {"model": ErrorResponse, "description": "Rejected settings."},
    },
)
async def create_session(
    body: CreateSessionRequest, request: Request,
) -> CreateSessionResponse:
    """Create a session and start its tick loop."""
    manager = _get_manager(request)
    client_ip = request.client.host if request.client else "unknown"
    try:
        instance = manager.create_session(
            grid_width=body.grid_width,
            grid_height=body.grid_height,
            initial_speed=body.initial_speed,
            scoring=body.scoring,
            poison_enabled=body.poison_enabled,
            seed=body.seed,
            client_ip=client_ip,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    manager.start_session(instance)
    return CreateSessionResponse(
        **instance.summary().model_dump(), token=instance.token,
    )


@router.get("")
async def list_sessions(request: Request) -> list[SessionSummary]:
    """List running sessions."""
    return _get_manager(request).list_sessions()


@router.get("/{session_id}", responses=_NOT_FOUND)
async def get_session(session_id: str, request: Request) -> dict:
    """Get session metadata and the current snapshot."""
    manager = _get_manager(request)
    instance = manager.get_session(session_id)
    if instance is None:
        raise HTTPException(status_code=404, detail="Session not found.")
    return {
        "session_id": instance.session_id,
        "status": instance.status.value,
        "connected": instance.connected,
        "spectators": len(instance.spectators),
        "state": instance.controller.snapshot(),
    }


@router.post(
    "/{session_id}/restart",
    status_code=200,
    responses={
        **_NOT_FOUND,
        **_FORBIDDEN,
        409: {"model": ErrorResponse, "description": "Not in game over."},
    },
)
async def restart_session(
    session_id: str, body: TokenRequest, request: Request,
) -> SessionSummary:
    """Restart a session after game over (player only)."""
    manager = _get_manager(request)
    try:
        instance = manager.restart_session(session_id, body.token)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except PermissionError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return instance.summary()


@router.delete(
    "/{session_id}", status_code=200, responses={**_NOT_FOUND, **_FORBIDDEN},
)
async def quit_session(
    session_id: str, body: TokenRequest, request: Request,
) -> SessionSummary:
    """Quit a session (player only)."""
    manager = _get_manager(request)
    try:
        instance = manager.quit_session(session_id, body.token)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except PermissionError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    return instance.summary()
