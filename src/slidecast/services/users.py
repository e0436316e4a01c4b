"""Account signup and signin."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from slidecast.domain.errors import (
    ConflictError,
    InvalidPasswordError,
    UserNotFoundError,
)
from slidecast.domain.models import UserRecord
from slidecast.services.passwords import PasswordHasher
from slidecast.services.tokens import TokenIssuer

logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for user accounts."""

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user with this email, if present."""

    def get_by_username(self, username: str) -> UserRecord | None:
        """Return the user with this username, if present."""

    def create_user(self, email: str, username: str, password_hash: str) -> UserRecord:
        """Create a user; raise ConflictError when email or username is taken."""


@dataclass(frozen=True)
class SigninResult:
    """Token issued for a successful signin."""

    token: str
    user_id: UUID


@dataclass
class UserService:
    """Application service for account lifecycle actions."""

    repository: UserRepository
    password_hasher: PasswordHasher
    token_issuer: TokenIssuer

    def find_by_email_or_username(
        self, email: str, username: str
    ) -> UserRecord | None:
        """Return any user that already owns the email or the username."""
        return self.repository.get_by_email(email) or self.repository.get_by_username(
            username
        )

    async def signup(self, email: str, username: str, password: str) -> UserRecord:
        """Register a new account and return it."""
        if await asyncio.to_thread(self.find_by_email_or_username, email, username):
            logger.info("Signup rejected, identity taken", extra={"username": username})
            raise ConflictError("Email or username already exists")
        password_hash = await self.password_hasher.hash(password)
        user = await asyncio.to_thread(
            self.repository.create_user,
            email=email,
            username=username,
            password_hash=password_hash,
        )
        logger.info("User registered", extra={"user_id": str(user.id)})
        return user

    async def signin(self, email: str, password: str) -> SigninResult:
        """Check credentials and issue a bearer token."""
        user = await asyncio.to_thread(self.repository.get_by_email, email)
        if user is None:
            raise UserNotFoundError("user not found")
        if not await self.password_hasher.verify(password, user.password_hash):
            raise InvalidPasswordError("incorrect password")
        return SigninResult(
            token=self.token_issuer.issue_token(user.id), user_id=user.id
        )
