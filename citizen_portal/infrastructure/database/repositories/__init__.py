"""SQLAlchemy-backed repository implementations."""

from .account_repository import SqlAccountRepository
from .application_repository import SqlApplicationRepository
from .audit_repository import SqlAuditRepository
from .notification_repository import SqlNotificationRepository

__all__ = [
    "SqlAccountRepository",
    "SqlApplicationRepository",
    "SqlAuditRepository",
    "SqlNotificationRepository",
]
