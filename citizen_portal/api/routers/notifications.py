"""In-app notifications for the signed-in account."""
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from citizen_portal.core.security import get_current_account
from citizen_portal.interfaces.http.deps import get_db_session, get_notification_service
from citizen_portal.interfaces.http.errors import api_error
from citizen_portal.modules.accounts import Account as AccountDomain
from citizen_portal.modules.notifications import NotificationNotFoundError, NotificationService
from citizen_portal.schemas import ApiResponse, NotificationResponse

router = APIRouter()


@router.get("", response_model=ApiResponse[List[NotificationResponse]])
async def list_notifications(
    unread_only: bool = False,
    account: AccountDomain = Depends(get_current_account),
    notification_service: NotificationService = Depends(get_notification_service),
):
    notifications = await notification_service.list_for_account(account.id, unread_only=unread_only)
    return ApiResponse[List[NotificationResponse]](
        data=[NotificationResponse.model_validate(item) for item in notifications]
    )


@router.patch("/{notification_id}/read", response_model=ApiResponse[NotificationResponse])
async def mark_notification_read(
    notification_id: str,
    db: AsyncSession = Depends(get_db_session),
    account: AccountDomain = Depends(get_current_account),
    notification_service: NotificationService = Depends(get_notification_service),
):
    try:
        notification = await notification_service.mark_read(notification_id, account.id)
    except NotificationNotFoundError as exc:
        raise api_error(status.HTTP_404_NOT_FOUND, "Notification not found") from exc
    await db.commit()
    return ApiResponse[NotificationResponse](
        message="Notification marked as read",
        data=NotificationResponse.model_validate(notification),
    )
