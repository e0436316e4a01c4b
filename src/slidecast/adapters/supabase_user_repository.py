"""Supabase-backed user repository."""

from dataclasses import dataclass
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import Client

from slidecast.domain.errors import ConflictError
from slidecast.domain.models import UserRecord
from slidecast.services.users import UserRepository

_COLUMNS = "id, email, username, password_hash"
_UNIQUE_VIOLATION = "23505"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user with this email, if present."""
        return self._get_by("email", email)

    def get_by_username(self, username: str) -> UserRecord | None:
        """Return the user with this username, if present."""
        return self._get_by("username", username)

    def create_user(self, email: str, username: str, password_hash: str) -> UserRecord:
        """Insert a user row and return it."""
        try:
            response = (
                self.client.table("users")
                .insert(
                    {
                        "email": email,
                        "username": username,
                        "password_hash": password_hash,
                    }
                )
                .execute()
            )
        except APIError as exc:
            if exc.code == _UNIQUE_VIOLATION:
                raise ConflictError("Email or username already exists") from exc
            raise
        if not response.data:
            raise RuntimeError("Failed to create user in Supabase")
        return _to_record(response.data[0])

    def _get_by(self, column: str, value: str) -> UserRecord | None:
        response = (
            self.client.table("users")
            .select(_COLUMNS)
            .eq(column, value)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_record(response.data[0])


def _to_record(row: dict[str, object]) -> UserRecord:
    return UserRecord(
        id=UUID(str(row["id"])),
        email=str(row["email"]),
        username=str(row["username"]),
        password_hash=str(row["password_hash"]),
    )
