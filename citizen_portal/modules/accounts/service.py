"""Domain services for account management."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from citizen_portal.core.config import Settings, get_settings
from citizen_portal.core.crypto import PasswordHasher

from .exceptions import AccountAlreadyExistsError, AccountNotFoundError, IncorrectPasswordError
from .models import (
    Account,
    AccountCreateInput,
    AccountStats,
    AccountStatus,
    ProfileUpdateInput,
    normalize_email,
)
from .repository import AccountRepository

logger = logging.getLogger(__name__)


class AccountService:
    """Encapsulates core account use cases."""

    def __init__(self, repository: AccountRepository, hasher: PasswordHasher) -> None:
        self._repository = repository
        self._hasher = hasher

    @classmethod
    def with_session(cls, session: AsyncSession, settings: Optional[Settings] = None) -> "AccountService":
        # Imported lazily: the SQL repository imports this package's models.
        from citizen_portal.infrastructure.database.repositories.account_repository import SqlAccountRepository

        settings = settings or get_settings()
        return cls(SqlAccountRepository(session), PasswordHasher(rounds=settings.security.bcrypt_rounds))

    async def get_by_id(self, account_id: str) -> Account | None:
        return await self._repository.get_by_id(account_id)

    async def get_by_email(self, email: str) -> Account | None:
        return await self._repository.get_by_email(normalize_email(email))

    async def require(self, account_id: str) -> Account:
        account = await self._repository.get_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    async def register(self, payload: AccountCreateInput) -> Account:
        email = normalize_email(payload.email)
        existing = await self._repository.get_by_email(email)
        if existing is not None:
            raise AccountAlreadyExistsError(email)

        password_hash = await self._hasher.hash(payload.password)
        account = await self._repository.create_account(
            email=email,
            password_hash=password_hash,
            first_name=payload.first_name,
            last_name=payload.last_name,
            role=payload.role.upper(),
            phone_number=payload.phone_number,
            date_of_birth=payload.date_of_birth,
            address=payload.address,
        )
        logger.info("New user registered: %s", account.email)
        return account

    async def update_profile(self, account_id: str, payload: ProfileUpdateInput) -> Account:
        await self.require(account_id)
        return await self._repository.update_account(account_id, **payload.changes())

    async def change_password(self, account_id: str, current_password: str, new_password: str) -> Account:
        account = await self.require(account_id)
        if not await self._hasher.verify(current_password, account.password_hash):
            raise IncorrectPasswordError(account_id)
        password_hash = await self._hasher.hash(new_password)
        return await self._repository.update_account(account_id, password_hash=password_hash)

    async def mark_verified(self, account_id: str) -> Account:
        await self.require(account_id)
        return await self._repository.update_account(account_id, is_verified=True)

    async def list_accounts(
        self,
        *,
        status: Optional[str] = None,
        role: Optional[str] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> Sequence[Account]:
        return await self._repository.list_accounts(
            status=status.upper() if status else None,
            role=role.upper() if role else None,
            skip=skip,
            limit=limit,
        )

    async def stats(self, now: Optional[datetime] = None) -> AccountStats:
        now = now or datetime.now(timezone.utc)
        return AccountStats(
            total=await self._repository.count_accounts(),
            active=await self._repository.count_accounts(status=AccountStatus.ACTIVE.value),
            suspended=await self._repository.count_accounts(status=AccountStatus.SUSPENDED.value),
            locked=await self._repository.count_accounts(locked_at=now),
        )
