"""Brute-force lockout policy for password logins.

Everything here is pure: callers pass the account snapshot and the current
time, and persist whatever state the policy hands back. The gate decision is
one of four tagged results, checked in a fixed order::

    Locked > Deactivated > Suspended > Allowed

Only ``Allowed`` lets the caller go on to verify the password. A lock expires
lazily: once ``lockout_until`` is in the past the account evaluates as
unlocked again without any stored change.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Protocol, Union

from citizen_portal.core.config import Settings

from .models import AccountStatus

MAX_FAILED_ATTEMPTS = 5
LOCKOUT_DURATION = timedelta(minutes=15)


class LockoutSubject(Protocol):
    is_active: bool
    status: str
    failed_login_attempts: int
    lockout_until: Optional[datetime]


@dataclass(frozen=True, slots=True)
class Allowed:
    pass


@dataclass(frozen=True, slots=True)
class Locked:
    until: datetime

    def retry_after(self, now: datetime) -> int:
        return max(int((self.until - now).total_seconds()), 1)


@dataclass(frozen=True, slots=True)
class Deactivated:
    pass


@dataclass(frozen=True, slots=True)
class Suspended:
    pass


LoginGate = Union[Allowed, Locked, Deactivated, Suspended]


@dataclass(frozen=True, slots=True)
class LockoutState:
    """Counter values to persist after an attempt."""

    failed_login_attempts: int
    lockout_until: Optional[datetime]

    @property
    def locked(self) -> bool:
        return self.lockout_until is not None


@dataclass(frozen=True, slots=True)
class LockoutPolicy:
    max_failed_attempts: int = MAX_FAILED_ATTEMPTS
    lockout_duration: timedelta = LOCKOUT_DURATION

    @classmethod
    def from_settings(cls, settings: Settings) -> "LockoutPolicy":
        return cls(
            max_failed_attempts=settings.lockout.max_failed_attempts,
            lockout_duration=timedelta(minutes=settings.lockout.lockout_minutes),
        )

    @staticmethod
    def is_locked(lockout_until: Optional[datetime], now: datetime) -> bool:
        return lockout_until is not None and lockout_until > now

    def evaluate(self, account: LockoutSubject, now: datetime) -> LoginGate:
        if self.is_locked(account.lockout_until, now):
            return Locked(until=account.lockout_until)
        if not account.is_active:
            return Deactivated()
        if account.status == AccountStatus.SUSPENDED.value:
            return Suspended()
        return Allowed()

    def register_failure(self, account: LockoutSubject, now: datetime) -> LockoutState:
        previous = account.failed_login_attempts or 0
        if account.lockout_until is not None and account.lockout_until <= now:
            # A lapsed lock counts as a clear: the count starts over.
            previous = 0
        attempts = previous + 1
        if attempts >= self.max_failed_attempts:
            return LockoutState(failed_login_attempts=attempts, lockout_until=now + self.lockout_duration)
        return LockoutState(failed_login_attempts=attempts, lockout_until=None)

    def register_success(self) -> LockoutState:
        return LockoutState(failed_login_attempts=0, lockout_until=None)


__all__ = [
    "Allowed",
    "Deactivated",
    "LOCKOUT_DURATION",
    "Locked",
    "LockoutPolicy",
    "LockoutState",
    "LoginGate",
    "MAX_FAILED_ATTEMPTS",
    "Suspended",
]
