"""Application configuration."""

import os
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

DEFAULT_MAX_UPLOAD_BYTES = 50 * 1024 * 1024


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    token_secret: str
    token_max_age_seconds: int = 7 * 24 * 60 * 60
    bcrypt_rounds: int = 10
    password_hash_workers: int = 2
    storage_bucket: str = "images"
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    allowed_upload_extensions: str = ".pdf,.jpg"
    rasterize_dpi: int = 150
    deck_upload_concurrency: int | None = None
    deck_scratch_dir: str = "tmp/decks"
    end_session_mode: Literal["advisory", "persist"] = "advisory"
    cors_allow_origins: str = "*"
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_csv(raw: str | None) -> list[str]:
    """Split a comma separated env value, dropping blanks."""
    if raw is None:
        return []
    return [chunk.strip() for chunk in raw.split(",") if chunk.strip()]


def parse_extensions(raw: str | None) -> frozenset[str]:
    """Parse allowed upload extensions into lowercase, dot-prefixed form."""
    extensions: set[str] = set()
    for value in parse_csv(raw):
        normalized = value.lower()
        if not normalized.startswith("."):
            normalized = f".{normalized}"
        extensions.add(normalized)
    return frozenset(extensions)
