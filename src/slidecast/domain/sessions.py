"""Domain models for live presentation sessions."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

STATUS_NOT_STARTED = "not_started"
STATUS_ACTIVE = "active"
STATUS_ENDED = "ended"


@dataclass(frozen=True)
class LiveSessionRecord:
    """Represents a persisted live session."""

    id: UUID
    title: str
    user_id: UUID
    start_time: datetime | None
    status: str
    ended_at: datetime | None = None

    @property
    def is_started(self) -> bool:
        return self.start_time is not None
