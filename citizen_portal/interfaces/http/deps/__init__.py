"""Reusable FastAPI dependencies."""

from .database import get_db_session
from .account import (
    get_account_admin_service,
    get_account_repository,
    get_account_service,
    get_app_container,
    get_authentication_service,
)
from .services import (
    build_audit_context,
    get_application_service,
    get_audit_service,
    get_notification_service,
)

__all__ = [
    "build_audit_context",
    "get_account_admin_service",
    "get_account_repository",
    "get_account_service",
    "get_app_container",
    "get_application_service",
    "get_audit_service",
    "get_authentication_service",
    "get_db_session",
    "get_notification_service",
]
