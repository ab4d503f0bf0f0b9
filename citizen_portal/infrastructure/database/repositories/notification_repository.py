"""SQLAlchemy repository for notifications."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from citizen_portal.db.models import Notification as NotificationModel
from citizen_portal.modules.notifications.models import Notification


class SqlNotificationRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add_notification(
        self,
        *,
        account_id: str,
        title: str,
        message: str,
        type: str,
    ) -> Notification:
        model = NotificationModel(
            account_id=account_id,
            title=title,
            message=message,
            type=type,
            is_read=False,
        )
        # Savepoint: a rejected row must not poison the caller's transaction.
        async with self._session.begin_nested():
            self._session.add(model)
            await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def list_for_account(self, account_id: str, *, unread_only: bool = False) -> Sequence[Notification]:
        stmt = select(NotificationModel).where(NotificationModel.account_id == account_id)
        if unread_only:
            stmt = stmt.where(NotificationModel.is_read.is_(False))
        stmt = stmt.order_by(NotificationModel.created_at.desc())
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def mark_read(self, notification_id: str, account_id: str) -> Notification | None:
        stmt = select(NotificationModel).where(
            NotificationModel.id == notification_id,
            NotificationModel.account_id == account_id,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None
        model.is_read = True
        await self._session.flush()
        return self._to_domain(model)

    @staticmethod
    def _to_domain(model: NotificationModel) -> Notification:
        return Notification(
            id=str(model.id),
            account_id=model.account_id,
            title=model.title,
            message=model.message,
            type=model.type,
            is_read=bool(model.is_read),
            created_at=model.created_at,
        )
