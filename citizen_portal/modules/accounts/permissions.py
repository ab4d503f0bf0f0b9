"""Role based permissions."""

from __future__ import annotations

from enum import Enum

from .models import Role


class Permission(str, Enum):
    READ_APPLICATIONS = "READ_APPLICATIONS"
    WRITE_APPLICATIONS = "WRITE_APPLICATIONS"
    DELETE_APPLICATIONS = "DELETE_APPLICATIONS"
    READ_USERS = "READ_USERS"
    WRITE_USERS = "WRITE_USERS"
    DELETE_USERS = "DELETE_USERS"
    READ_ANALYTICS = "READ_ANALYTICS"
    WRITE_ANALYTICS = "WRITE_ANALYTICS"
    READ_SETTINGS = "READ_SETTINGS"
    WRITE_SETTINGS = "WRITE_SETTINGS"
    MANAGE_SERVICES = "MANAGE_SERVICES"
    MANAGE_PAYMENTS = "MANAGE_PAYMENTS"
    MANAGE_NOTIFICATIONS = "MANAGE_NOTIFICATIONS"
    VIEW_AUDIT_LOGS = "VIEW_AUDIT_LOGS"
    MANAGE_ROLES = "MANAGE_ROLES"


ROLE_PERMISSIONS: dict[str, frozenset[Permission]] = {
    Role.CITIZEN.value: frozenset({
        Permission.READ_APPLICATIONS,
        Permission.WRITE_APPLICATIONS,
    }),
    Role.STAFF.value: frozenset({
        Permission.READ_APPLICATIONS,
        Permission.WRITE_APPLICATIONS,
        Permission.READ_USERS,
        Permission.MANAGE_SERVICES,
        Permission.MANAGE_PAYMENTS,
        Permission.MANAGE_NOTIFICATIONS,
    }),
    Role.ADMIN.value: frozenset(Permission),
}


def has_permission(role: str, permission: Permission) -> bool:
    return permission in ROLE_PERMISSIONS.get((role or "").upper(), frozenset())
