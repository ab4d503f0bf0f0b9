"""Domain modules and their public exports."""

from . import accounts, applications, audit, notifications

__all__ = [
    "accounts",
    "applications",
    "audit",
    "notifications",
]
