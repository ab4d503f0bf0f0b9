"""SQLAlchemy implementation of the account repository."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from citizen_portal.db.models import Account as AccountModel
from citizen_portal.modules.accounts.exceptions import AccountAlreadyExistsError, AccountNotFoundError
from citizen_portal.modules.accounts.models import Account
from citizen_portal.modules.accounts.repository import AccountRepository

UPDATABLE_FIELDS = frozenset({
    "first_name",
    "last_name",
    "phone_number",
    "date_of_birth",
    "address",
    "role",
    "status",
    "is_active",
    "is_verified",
    "password_hash",
    "failed_login_attempts",
    "lockout_until",
    "last_login_at",
})


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes; everything is written in UTC.
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


class SqlAccountRepository(AccountRepository):
    """Account repository backed by SQLAlchemy models."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _get_model(self, account_id: str) -> AccountModel | None:
        stmt = select(AccountModel).where(AccountModel.id == account_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_id(self, account_id: str) -> Account | None:
        return self._to_domain(await self._get_model(account_id))

    async def get_by_email(self, email: str) -> Account | None:
        stmt = select(AccountModel).where(func.lower(AccountModel.email) == email.lower())
        result = await self._session.execute(stmt)
        return self._to_domain(result.scalar_one_or_none())

    async def list_accounts(
        self,
        *,
        status: Optional[str] = None,
        role: Optional[str] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> Sequence[Account]:
        stmt = select(AccountModel).order_by(AccountModel.created_at.desc())
        if status:
            stmt = stmt.where(AccountModel.status == status)
        if role:
            stmt = stmt.where(AccountModel.role == role)
        stmt = stmt.offset(skip).limit(limit)
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def count_accounts(
        self,
        *,
        status: Optional[str] = None,
        locked_at: Optional[datetime] = None,
    ) -> int:
        stmt = select(func.count()).select_from(AccountModel)
        if status:
            stmt = stmt.where(AccountModel.status == status)
        if locked_at is not None:
            stmt = stmt.where(AccountModel.lockout_until > locked_at)
        result = await self._session.execute(stmt)
        return int(result.scalar_one())

    async def create_account(
        self,
        *,
        email: str,
        password_hash: str,
        first_name: str,
        last_name: str,
        role: str,
        phone_number: Optional[str],
        date_of_birth: Optional[date],
        address: Optional[str],
    ) -> Account:
        model = AccountModel(
            email=email,
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
            role=role,
            phone_number=phone_number,
            date_of_birth=date_of_birth,
            address=address,
            failed_login_attempts=0,
            lockout_until=None,
        )
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            await self._session.rollback()
            raise AccountAlreadyExistsError(email) from exc
        await self._session.refresh(model)
        return self._to_domain(model)

    async def update_account(self, account_id: str, **changes: Any) -> Account:
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Unsupported account fields: {', '.join(sorted(unknown))}")

        model = await self._get_model(account_id)
        if model is None:
            raise AccountNotFoundError(account_id)

        for name, value in changes.items():
            setattr(model, name, value)

        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    @staticmethod
    def _to_domain(model: AccountModel | None) -> Account | None:
        if model is None:
            return None
        return Account(
            id=str(model.id),
            email=model.email,
            first_name=model.first_name,
            last_name=model.last_name,
            role=model.role or "CITIZEN",
            is_active=bool(model.is_active),
            password_hash=model.password_hash,
            status=model.status or "ACTIVE",
            is_verified=bool(model.is_verified),
            failed_login_attempts=model.failed_login_attempts or 0,
            lockout_until=_as_utc(model.lockout_until),
            last_login_at=_as_utc(model.last_login_at),
            phone_number=model.phone_number,
            date_of_birth=model.date_of_birth,
            address=model.address,
            created_at=_as_utc(model.created_at),
            updated_at=_as_utc(model.updated_at),
        )
