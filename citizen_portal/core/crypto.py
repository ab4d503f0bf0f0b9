"""Utilities for password hashing and verification."""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from functools import lru_cache

import bcrypt
from fastapi.concurrency import run_in_threadpool

# bcrypt only looks at the first 72 bytes of input.
BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash plain text password using bcrypt."""
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


@lru_cache(maxsize=None)
def decoy_hash(rounds: int) -> str:
    return hash_password(secrets.token_urlsafe(32), rounds)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain text password against a stored bcrypt hash."""
    if not plain_password or not hashed_password:
        return False
    try:
        return bcrypt.checkpw(_encode(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        return False


@dataclass(slots=True)
class PasswordHasher:
    """Async facade over bcrypt; hashing runs in the threadpool so the event loop stays free."""

    rounds: int = 12

    async def hash(self, plain_password: str) -> str:
        return await run_in_threadpool(hash_password, plain_password, self.rounds)

    async def verify(self, plain_password: str, hashed_password: str) -> bool:
        return await run_in_threadpool(verify_password, plain_password, hashed_password)

    async def verify_decoy(self, plain_password: str) -> bool:
        """Run a full bcrypt check that can never succeed, so a missing account costs as much as a wrong password."""
        return await self.verify(plain_password, await run_in_threadpool(decoy_hash, self.rounds))


__all__ = ["PasswordHasher", "decoy_hash", "hash_password", "verify_password"]
