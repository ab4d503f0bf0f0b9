"""Audit domain models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class AuditAction(str, Enum):
    USER_SUSPENDED = "USER_SUSPENDED"
    USER_REACTIVATED = "USER_REACTIVATED"
    ACCOUNT_UNLOCKED = "ACCOUNT_UNLOCKED"
    PASSWORD_CHANGED = "PASSWORD_CHANGED"


@dataclass(slots=True)
class AuditContext:
    """Who performed an action and from where."""

    actor_id: Optional[str]
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


@dataclass(slots=True)
class AuditEntry:
    id: int
    action: str
    actor_id: Optional[str]
    entity: Optional[str]
    entity_id: Optional[str]
    details: Optional[dict[str, Any]]
    ip_address: Optional[str]
    user_agent: Optional[str]
    created_at: Optional[datetime]
