"""Audit trail for administrative actions."""

from .models import AuditAction, AuditContext, AuditEntry
from .repository import AuditRepository
from .service import AuditService

__all__ = [
    "AuditAction",
    "AuditContext",
    "AuditEntry",
    "AuditRepository",
    "AuditService",
]
