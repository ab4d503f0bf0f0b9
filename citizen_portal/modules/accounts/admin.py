"""Administrative account actions: suspend, reactivate, unlock.

The status change is the only part allowed to fail the request. The audit
entry, in-app notification and email that follow are fire-and-forget.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from citizen_portal.modules.audit import AuditAction, AuditContext, AuditService
from citizen_portal.modules.notifications import Mailer, NotificationService, NotificationType, Recipient
from citizen_portal.modules.notifications.mailer import account_reactivated_email, account_suspended_email

from .exceptions import AccountNotFoundError, AccountStateError
from .models import Account, AccountStatus
from .repository import AccountRepository

logger = logging.getLogger(__name__)

DEFAULT_REACTIVATION_REASON = "Your account has been reviewed and reactivated"


@dataclass(slots=True)
class AccountAdminService:
    repository: AccountRepository
    audit: AuditService
    notifications: NotificationService

    @classmethod
    def with_session(cls, session: AsyncSession, mailer: Mailer) -> "AccountAdminService":
        from citizen_portal.infrastructure.database.repositories.account_repository import SqlAccountRepository

        return cls(
            SqlAccountRepository(session),
            AuditService.with_session(session),
            NotificationService.with_session(session, mailer),
        )

    async def _require(self, account_id: str) -> Account:
        account = await self.repository.get_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    async def suspend(self, account_id: str, *, reason: str, context: AuditContext) -> Account:
        account = await self._require(account_id)
        if account.is_suspended():
            raise AccountStateError("User is already suspended")

        account = await self.repository.update_account(account_id, status=AccountStatus.SUSPENDED.value)
        await self.audit.record(
            AuditAction.USER_SUSPENDED,
            context=context,
            entity="User",
            entity_id=account_id,
            details={"status": AccountStatus.SUSPENDED.value, "reason": reason},
        )
        await self.notifications.notify(
            Recipient(account.id, account.email),
            title="Account Suspended",
            message=f"Your account has been suspended. Reason: {reason}",
            type=NotificationType.ACCOUNT_UPDATE,
            email=account_suspended_email(account.full_name, reason),
        )
        logger.info("User %s suspended by admin %s", account_id, context.actor_id)
        return account

    async def reactivate(self, account_id: str, *, reason: Optional[str], context: AuditContext) -> Account:
        account = await self._require(account_id)
        if not account.is_suspended():
            raise AccountStateError("User is not suspended")

        account = await self.repository.update_account(account_id, status=AccountStatus.ACTIVE.value)
        await self.audit.record(
            AuditAction.USER_REACTIVATED,
            context=context,
            entity="User",
            entity_id=account_id,
            details={"status": AccountStatus.ACTIVE.value, "reason": reason or "No reason provided"},
        )
        await self.notifications.notify(
            Recipient(account.id, account.email),
            title="Account Reactivated",
            message=f"Your account has been reactivated. Reason: {reason or 'No reason provided'}",
            type=NotificationType.ACCOUNT_UPDATE,
            email=account_reactivated_email(account.full_name, reason or DEFAULT_REACTIVATION_REASON),
        )
        logger.info("User %s reactivated by admin %s", account_id, context.actor_id)
        return account

    async def unlock(self, account_id: str, *, context: AuditContext) -> Account:
        await self._require(account_id)
        account = await self.repository.update_account(
            account_id,
            failed_login_attempts=0,
            lockout_until=None,
        )
        await self.audit.record(
            AuditAction.ACCOUNT_UNLOCKED,
            context=context,
            entity="User",
            entity_id=account_id,
        )
        logger.info("User %s unlocked by admin %s", account_id, context.actor_id)
        return account
