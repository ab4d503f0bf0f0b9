"""Repository protocol for notifications."""

from __future__ import annotations

from typing import Protocol, Sequence

from .models import Notification


class NotificationRepository(Protocol):
    async def add_notification(
        self,
        *,
        account_id: str,
        title: str,
        message: str,
        type: str,
    ) -> Notification:
        ...

    async def list_for_account(self, account_id: str, *, unread_only: bool = False) -> Sequence[Notification]:
        ...

    async def mark_read(self, notification_id: str, account_id: str) -> Notification | None:
        """Mark as read only if owned by ``account_id``; ``None`` otherwise."""
        ...
