"""Password hashing that stays off the event loop."""

import asyncio
from concurrent.futures import Executor
from dataclasses import dataclass
from typing import Protocol

import bcrypt

# bcrypt only consumes the first 72 bytes of a password.
_BCRYPT_MAX_BYTES = 72


class PasswordHasher(Protocol):
    """Interface for one-way salted password hashing."""

    async def hash(self, password: str) -> str:
        """Return a salted hash for the password."""

    async def verify(self, password: str, password_hash: str) -> bool:
        """Return true when the password matches the stored hash."""


@dataclass
class BcryptPasswordHasher(PasswordHasher):
    """bcrypt hasher that runs the CPU-bound work on an executor."""

    executor: Executor | None = None
    rounds: int = 10

    async def hash(self, password: str) -> str:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self.executor, self._hash_sync, password)

    async def verify(self, password: str, password_hash: str) -> bool:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            self.executor, self._verify_sync, password, password_hash
        )

    def _hash_sync(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_encode(password), salt).decode("utf-8")

    def _verify_sync(self, password: str, password_hash: str) -> bool:
        return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]
