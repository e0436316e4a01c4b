"""Live session endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request

from slidecast.api.auth import require_user
from slidecast.api.models import CreateSessionRequest

if TYPE_CHECKING:
    from slidecast.containers import AppContainer
    from slidecast.domain.sessions import LiveSessionRecord

router = APIRouter(tags=["sessions"])


@router.post("/session")
def create_session(
    payload: CreateSessionRequest,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, str]:
    """Create a live session owned by the caller."""
    container: AppContainer = request.app.state.container
    session = container.session_service.create_session(payload.title, user_id)
    return {"sessionId": str(session.id)}


@router.get("/sessionsResponse", dependencies=[Depends(require_user)])
def list_sessions(request: Request) -> list[dict[str, object]]:
    """Return every session."""
    container: AppContainer = request.app.state.container
    sessions = container.session_service.list_sessions()
    return [_session_summary(item) for item in sessions]


@router.post("/session/{session_id}/start", dependencies=[Depends(require_user)])
def start_session(session_id: str, request: Request) -> dict[str, str]:
    container: AppContainer = request.app.state.container
    container.session_service.start_session(session_id)
    return {"message": "Session started successfully"}


@router.post("/session/{session_id}/end", dependencies=[Depends(require_user)])
def end_session(session_id: str, request: Request) -> dict[str, str]:
    container: AppContainer = request.app.state.container
    container.session_service.end_session(session_id)
    return {"message": "Session ended successfully"}


def _session_summary(session: LiveSessionRecord) -> dict[str, object]:
    return {
        "sessionId": str(session.id),
        "title": session.title,
        "startTime": session.start_time.isoformat() if session.start_time else None,
        "status": session.status,
    }
