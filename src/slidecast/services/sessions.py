"""Live session registry and its start/end transitions."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from slidecast.domain.errors import NotFoundError, SessionStateError
from slidecast.domain.sessions import STATUS_ENDED, LiveSessionRecord

logger = logging.getLogger(__name__)

END_MODE_ADVISORY = "advisory"
END_MODE_PERSIST = "persist"


class LiveSessionRepository(Protocol):
    """Persistence interface for live sessions."""

    def create_session(self, title: str, user_id: UUID) -> LiveSessionRecord:
        """Create a not-started session and return it."""

    def get_session(self, session_id: UUID) -> LiveSessionRecord | None:
        """Return a session by id, if present."""

    def list_sessions(self) -> list[LiveSessionRecord]:
        """Return every session."""

    def mark_started(
        self, session_id: UUID, start_time: datetime
    ) -> LiveSessionRecord | None:
        """Set the start time only where it is still null.

        Returns the updated session, or None when no row matched.
        """

    def mark_ended(
        self, session_id: UUID, ended_at: datetime
    ) -> LiveSessionRecord | None:
        """Set the ended status only where the session is not already ended."""


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class SessionService:
    """Create, list, start and end live sessions."""

    repository: LiveSessionRepository
    end_mode: str = END_MODE_ADVISORY
    clock: Callable[[], datetime] = field(default=_utcnow)

    def create_session(self, title: str, owner_id: UUID) -> LiveSessionRecord:
        session = self.repository.create_session(title=title, user_id=owner_id)
        logger.info(
            "Session created",
            extra={"session_id": str(session.id), "user_id": str(owner_id)},
        )
        return session

    def list_sessions(self) -> list[LiveSessionRecord]:
        return self.repository.list_sessions()

    def get_session(self, session_id: str) -> LiveSessionRecord:
        """Return a session or raise NotFoundError for unknown or malformed ids."""
        parsed = _parse_session_id(session_id)
        session = self.repository.get_session(parsed) if parsed else None
        if session is None:
            raise NotFoundError("session does not exist")
        return session

    def start_session(self, session_id: str) -> LiveSessionRecord:
        """Move a session to active; a session can only be started once."""
        session = self.get_session(session_id)
        if session.is_started:
            raise SessionStateError("session already started")
        # Conditional write: a concurrent start that committed first leaves no
        # row with a null start time, so this one matches nothing.
        started = self.repository.mark_started(session.id, self.clock())
        if started is None:
            raise SessionStateError("session already started")
        logger.info("Session started", extra={"session_id": str(session.id)})
        return started

    def end_session(self, session_id: str) -> LiveSessionRecord:
        """Validate that a session can end and, in persist mode, record it."""
        session = self.get_session(session_id)
        if not session.is_started:
            raise SessionStateError("session not started")
        if self.end_mode != END_MODE_PERSIST:
            return session
        if session.status == STATUS_ENDED:
            raise SessionStateError("session already ended")
        ended = self.repository.mark_ended(session.id, self.clock())
        if ended is None:
            raise SessionStateError("session already ended")
        logger.info("Session ended", extra={"session_id": str(session.id)})
        return ended


def _parse_session_id(raw: str) -> UUID | None:
    try:
        return UUID(raw)
    except ValueError:
        return None
