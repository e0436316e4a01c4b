"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from uuid import UUID, uuid4

import pytest

from slidecast.config import Settings
from slidecast.containers import AppContainer
from slidecast.domain.errors import ConflictError
from slidecast.domain.models import UserRecord
from slidecast.domain.sessions import (
    STATUS_ACTIVE,
    STATUS_ENDED,
    STATUS_NOT_STARTED,
    LiveSessionRecord,
)
from slidecast.services.decks import DeckIngestionService, DeckRasterizer, DeckStorage
from slidecast.services.passwords import PasswordHasher
from slidecast.services.sessions import LiveSessionRepository, SessionService
from slidecast.services.tokens import SignedTokenIssuer
from slidecast.services.users import UserRepository, UserService

# Shaped like a Supabase service key so create_client accepts it.
FAKE_SUPABASE_KEY = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
    "eyJyb2xlIjoic2VydmljZV9yb2xlIn0."
    "c2lnbmF0dXJl"
)

PNG_HEADER = b"\x89PNG\r\n\x1a\n"


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[UUID, UserRecord] = field(default_factory=dict)

    def get_by_email(self, email: str) -> UserRecord | None:
        return next((u for u in self.users.values() if u.email == email), None)

    def get_by_username(self, username: str) -> UserRecord | None:
        return next((u for u in self.users.values() if u.username == username), None)

    def create_user(self, email: str, username: str, password_hash: str) -> UserRecord:
        if self.get_by_email(email) or self.get_by_username(username):
            raise ConflictError("Email or username already exists")
        user = UserRecord(
            id=uuid4(), email=email, username=username, password_hash=password_hash
        )
        self.users[user.id] = user
        return user


@dataclass
class PlaintextHasher(PasswordHasher):
    """Reversible stand-in for bcrypt so tests stay fast."""

    async def hash(self, password: str) -> str:
        return f"hashed:{password}"

    async def verify(self, password: str, password_hash: str) -> bool:
        return password_hash == f"hashed:{password}"


@dataclass
class InMemoryLiveSessionRepository(LiveSessionRepository):
    """In-memory live session repository for tests."""

    sessions: dict[UUID, LiveSessionRecord] = field(default_factory=dict)
    start_writes: int = 0

    def create_session(self, title: str, user_id: UUID) -> LiveSessionRecord:
        session = LiveSessionRecord(
            id=uuid4(),
            title=title,
            user_id=user_id,
            start_time=None,
            status=STATUS_NOT_STARTED,
        )
        self.sessions[session.id] = session
        return session

    def get_session(self, session_id: UUID) -> LiveSessionRecord | None:
        return self.sessions.get(session_id)

    def list_sessions(self) -> list[LiveSessionRecord]:
        return list(self.sessions.values())

    def mark_started(
        self, session_id: UUID, start_time: datetime
    ) -> LiveSessionRecord | None:
        self.start_writes += 1
        session = self.sessions.get(session_id)
        if session is None or session.start_time is not None:
            return None
        updated = replace(session, start_time=start_time, status=STATUS_ACTIVE)
        self.sessions[session_id] = updated
        return updated

    def mark_ended(
        self, session_id: UUID, ended_at: datetime
    ) -> LiveSessionRecord | None:
        session = self.sessions.get(session_id)
        if session is None or session.status == STATUS_ENDED:
            return None
        updated = replace(session, status=STATUS_ENDED, ended_at=ended_at)
        self.sessions[session_id] = updated
        return updated


@dataclass
class FakeRasterizer(DeckRasterizer):
    """Rasterizer returning a fixed number of fake PNG pages."""

    page_count: int = 3
    calls: list[tuple[int, str]] = field(default_factory=list)

    async def rasterize(self, data: bytes, extension: str) -> list[bytes]:
        self.calls.append((len(data), extension))
        pages = range(1, self.page_count + 1)
        return [PNG_HEADER + f"page-{n}".encode() for n in pages]


@dataclass
class FakeDeckStorage(DeckStorage):
    """Bucket stand-in that records uploads and can fail chosen paths."""

    base_url: str = "https://cdn.example.test/images"
    objects: dict[str, bytes] = field(default_factory=dict)
    uploads: list[str] = field(default_factory=list)
    failing_paths: set[str] = field(default_factory=set)

    async def upload_png(self, path: str, data: bytes) -> None:
        self.uploads.append(path)
        if path in self.failing_paths:
            raise RuntimeError(f"upload rejected for {path}")
        self.objects[path] = data

    def public_url(self, path: str) -> str:
        return f"{self.base_url}/{path}"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=FAKE_SUPABASE_KEY,
        token_secret="test-secret",
    )


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def session_repository() -> InMemoryLiveSessionRepository:
    return InMemoryLiveSessionRepository()


@pytest.fixture
def rasterizer() -> FakeRasterizer:
    return FakeRasterizer()


@pytest.fixture
def storage() -> FakeDeckStorage:
    return FakeDeckStorage()


@pytest.fixture
def container(
    settings: Settings,
    user_repository: InMemoryUserRepository,
    session_repository: InMemoryLiveSessionRepository,
    rasterizer: FakeRasterizer,
    storage: FakeDeckStorage,
) -> AppContainer:
    token_issuer = SignedTokenIssuer(
        secret=settings.token_secret,
        max_age_seconds=settings.token_max_age_seconds,
    )
    user_service = UserService(
        repository=user_repository,
        password_hasher=PlaintextHasher(),
        token_issuer=token_issuer,
    )
    session_service = SessionService(repository=session_repository)
    deck_service = DeckIngestionService(rasterizer=rasterizer, storage=storage)

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        token_issuer=token_issuer,
        user_service=user_service,
        session_service=session_service,
        deck_service=deck_service,
        close_resources=close_resources,
    )
