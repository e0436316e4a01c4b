"""Supabase-backed live session repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from slidecast.domain.sessions import (
    STATUS_ACTIVE,
    STATUS_ENDED,
    STATUS_NOT_STARTED,
    LiveSessionRecord,
)
from slidecast.services.sessions import LiveSessionRepository

_COLUMNS = "id, title, user_id, start_time, status, ended_at"


@dataclass
class SupabaseLiveSessionRepository(LiveSessionRepository):
    """Supabase implementation for live sessions."""

    client: Client

    def create_session(self, title: str, user_id: UUID) -> LiveSessionRecord:
        """Create a session row and return it."""
        response = (
            self.client.table("live_sessions")
            .insert(
                {
                    "title": title,
                    "user_id": str(user_id),
                    "status": STATUS_NOT_STARTED,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create session")
        return _parse_row(response.data[0])

    def get_session(self, session_id: UUID) -> LiveSessionRecord | None:
        """Return a session by id, if present."""
        response = (
            self.client.table("live_sessions")
            .select(_COLUMNS)
            .eq("id", str(session_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def list_sessions(self) -> list[LiveSessionRecord]:
        """Return all sessions, oldest first."""
        response = (
            self.client.table("live_sessions")
            .select(_COLUMNS)
            .order("created_at", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def mark_started(
        self, session_id: UUID, start_time: datetime
    ) -> LiveSessionRecord | None:
        """Set start time and active status where the start time is still null."""
        response = (
            self.client.table("live_sessions")
            .update({"start_time": start_time.isoformat(), "status": STATUS_ACTIVE})
            .eq("id", str(session_id))
            .is_("start_time", "null")
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def mark_ended(
        self, session_id: UUID, ended_at: datetime
    ) -> LiveSessionRecord | None:
        """Set ended status where the session is not already ended."""
        response = (
            self.client.table("live_sessions")
            .update({"status": STATUS_ENDED, "ended_at": ended_at.isoformat()})
            .eq("id", str(session_id))
            .neq("status", STATUS_ENDED)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])


def _parse_timestamp(raw: object) -> datetime | None:
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None


def _parse_row(row: dict[str, object]) -> LiveSessionRecord:
    return LiveSessionRecord(
        id=UUID(str(row["id"])),
        title=str(row.get("title") or ""),
        user_id=UUID(str(row["user_id"])),
        start_time=_parse_timestamp(row.get("start_time")),
        status=str(row.get("status") or STATUS_NOT_STARTED),
        ended_at=_parse_timestamp(row.get("ended_at")),
    )
