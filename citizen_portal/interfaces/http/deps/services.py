"""Dependency providers for the audit, notification and application modules."""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from citizen_portal.core.container import ApplicationContainer
from citizen_portal.modules.accounts.models import Account
from citizen_portal.modules.applications.service import ApplicationService
from citizen_portal.modules.audit.models import AuditContext
from citizen_portal.modules.audit.service import AuditService
from citizen_portal.modules.notifications.service import NotificationService

from .account import get_app_container
from .database import get_db_session


def get_audit_service(db: AsyncSession = Depends(get_db_session)) -> AuditService:
    return AuditService.with_session(db)


def get_notification_service(
    db: AsyncSession = Depends(get_db_session),
    container: ApplicationContainer = Depends(get_app_container),
) -> NotificationService:
    return NotificationService.with_session(db, container.mailer)


def get_application_service(
    db: AsyncSession = Depends(get_db_session),
    container: ApplicationContainer = Depends(get_app_container),
) -> ApplicationService:
    return ApplicationService.with_session(db, container.settings.reference.max_attempts)


def build_audit_context(request: Request, actor: Account) -> AuditContext:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        ip_address = forwarded.split(",")[0].strip()
    else:
        ip_address = request.client.host if request.client else None
    user_agent = request.headers.get("user-agent")
    # Headers are client-controlled; clip them to the audit_logs column widths.
    return AuditContext(
        actor_id=actor.id,
        ip_address=ip_address[:64] if ip_address else None,
        user_agent=user_agent[:255] if user_agent else None,
    )


__all__ = [
    "build_audit_context",
    "get_application_service",
    "get_audit_service",
    "get_notification_service",
]
