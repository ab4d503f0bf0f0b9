"""Password login with brute-force lockout.

``AuthenticationService.login`` is a thin dispatcher over ``LockoutPolicy``:
fetch the account, ask the policy whether the attempt may proceed, verify
the password, then persist whatever counter state the policy returns. Every
rejection surfaces as an ``AuthenticationError`` subclass.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from citizen_portal.core.config import Settings, get_settings
from citizen_portal.core.crypto import PasswordHasher
from citizen_portal.core.tokens import TokenIssuer

from .exceptions import (
    AccountDeactivatedError,
    AccountLockedError,
    AccountSuspendedError,
    InvalidCredentialsError,
)
from .lockout import Deactivated, Locked, LockoutPolicy, Suspended
from .models import Account, normalize_email
from .repository import AccountRepository

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class LoginResult:
    account: Account
    token: str


class AuthenticationService:
    def __init__(
        self,
        repository: AccountRepository,
        hasher: PasswordHasher,
        token_issuer: TokenIssuer,
        policy: Optional[LockoutPolicy] = None,
        clock: Clock = utcnow,
    ) -> None:
        self._repository = repository
        self._hasher = hasher
        self._token_issuer = token_issuer
        self._policy = policy or LockoutPolicy()
        self._clock = clock

    @classmethod
    def with_session(cls, session: AsyncSession, settings: Optional[Settings] = None) -> "AuthenticationService":
        from citizen_portal.infrastructure.database.repositories.account_repository import SqlAccountRepository

        settings = settings or get_settings()
        return cls(
            SqlAccountRepository(session),
            PasswordHasher(rounds=settings.security.bcrypt_rounds),
            TokenIssuer.from_settings(settings),
            LockoutPolicy.from_settings(settings),
        )

    async def login(self, email: str, password: str) -> LoginResult:
        account = await self._repository.get_by_email(normalize_email(email))
        if account is None:
            await self._hasher.verify_decoy(password)
            raise InvalidCredentialsError()

        now = self._clock()
        gate = self._policy.evaluate(account, now)
        if isinstance(gate, Locked):
            logger.warning("Locked account login attempt: %s", account.email)
            raise AccountLockedError(gate.until, retry_after=gate.retry_after(now))
        if isinstance(gate, Deactivated):
            raise AccountDeactivatedError()
        if isinstance(gate, Suspended):
            raise AccountSuspendedError()

        if not await self._hasher.verify(password, account.password_hash):
            state = self._policy.register_failure(account, now)
            await self._repository.update_account(
                account.id,
                failed_login_attempts=state.failed_login_attempts,
                lockout_until=state.lockout_until,
            )
            if state.locked:
                logger.warning("Account locked for user: %s", account.email)
            raise InvalidCredentialsError()

        state = self._policy.register_success()
        account = await self._repository.update_account(
            account.id,
            failed_login_attempts=state.failed_login_attempts,
            lockout_until=state.lockout_until,
            last_login_at=now,
        )
        token = self._token_issuer.issue(account.id, now=now)
        logger.info("User logged in: %s", account.email)
        return LoginResult(account=account, token=token)
