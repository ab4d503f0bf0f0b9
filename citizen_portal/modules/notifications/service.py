"""Notification service: in-app records plus email, both fire-and-forget on the send side."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from .exceptions import NotificationNotFoundError
from .mailer import EmailContent, Mailer
from .models import Notification, NotificationType
from .repository import NotificationRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Recipient:
    account_id: str
    email: str


@dataclass(slots=True)
class NotificationService:
    repository: NotificationRepository
    mailer: Mailer

    @classmethod
    def with_session(cls, session: AsyncSession, mailer: Mailer) -> "NotificationService":
        from citizen_portal.infrastructure.database.repositories.notification_repository import (
            SqlNotificationRepository,
        )

        return cls(SqlNotificationRepository(session), mailer)

    async def notify(
        self,
        recipient: Recipient,
        *,
        title: str,
        message: str,
        type: NotificationType = NotificationType.GENERAL,
        email: Optional[EmailContent] = None,
    ) -> None:
        if email is not None:
            await self.send_email(recipient.email, email)
        try:
            await self.repository.add_notification(
                account_id=recipient.account_id,
                title=title,
                message=message,
                type=type.value,
            )
        except Exception:
            logger.exception("Failed to store notification '%s' for %s", title, recipient.account_id)

    async def send_email(self, to_email: str, content: EmailContent) -> bool:
        try:
            return await self.mailer.send(to_email, content)
        except Exception:
            logger.exception("Unexpected mailer failure sending '%s' to %s", content.subject, to_email)
            return False

    async def list_for_account(self, account_id: str, *, unread_only: bool = False) -> Sequence[Notification]:
        return await self.repository.list_for_account(account_id, unread_only=unread_only)

    async def mark_read(self, notification_id: str, account_id: str) -> Notification:
        notification = await self.repository.mark_read(notification_id, account_id)
        if notification is None:
            raise NotificationNotFoundError(notification_id)
        return notification
