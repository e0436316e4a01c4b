"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

from supabase import create_client

from slidecast.adapters.pdf2image_rasterizer import Pdf2ImageRasterizer
from slidecast.adapters.supabase_deck_storage import SupabaseDeckStorage
from slidecast.adapters.supabase_live_session_repository import (
    SupabaseLiveSessionRepository,
)
from slidecast.adapters.supabase_user_repository import SupabaseUserRepository
from slidecast.config import Settings, parse_extensions
from slidecast.services.decks import DeckIngestionService
from slidecast.services.passwords import BcryptPasswordHasher
from slidecast.services.sessions import SessionService
from slidecast.services.tokens import SignedTokenIssuer, TokenIssuer
from slidecast.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    token_issuer: TokenIssuer
    user_service: UserService
    session_service: SessionService
    deck_service: DeckIngestionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    hash_executor = ThreadPoolExecutor(
        max_workers=resolved_settings.password_hash_workers,
        thread_name_prefix="password-hash",
    )
    token_issuer = SignedTokenIssuer(
        secret=resolved_settings.token_secret,
        max_age_seconds=resolved_settings.token_max_age_seconds,
    )
    user_service = UserService(
        repository=SupabaseUserRepository(supabase_client),
        password_hasher=BcryptPasswordHasher(
            executor=hash_executor, rounds=resolved_settings.bcrypt_rounds
        ),
        token_issuer=token_issuer,
    )
    session_service = SessionService(
        repository=SupabaseLiveSessionRepository(supabase_client),
        end_mode=resolved_settings.end_session_mode,
    )
    deck_service = DeckIngestionService(
        rasterizer=Pdf2ImageRasterizer(dpi=resolved_settings.rasterize_dpi),
        storage=SupabaseDeckStorage(
            supabase_client, bucket=resolved_settings.storage_bucket
        ),
        allowed_extensions=parse_extensions(
            resolved_settings.allowed_upload_extensions
        ),
        max_upload_bytes=resolved_settings.max_upload_bytes,
        scratch_dir=Path(resolved_settings.deck_scratch_dir),
        upload_concurrency=resolved_settings.deck_upload_concurrency,
    )

    async def close_resources() -> None:
        hash_executor.shutdown(wait=False, cancel_futures=True)

    return AppContainer(
        settings=resolved_settings,
        token_issuer=token_issuer,
        user_service=user_service,
        session_service=session_service,
        deck_service=deck_service,
        close_resources=close_resources,
    )
