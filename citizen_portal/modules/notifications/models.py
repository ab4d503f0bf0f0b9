"""Notification domain models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class NotificationType(str, Enum):
    GENERAL = "GENERAL"
    ACCOUNT_UPDATE = "ACCOUNT_UPDATE"
    APPLICATION_UPDATE = "APPLICATION_UPDATE"


@dataclass(slots=True)
class Notification:
    id: str
    account_id: str
    title: str
    message: str
    type: str
    is_read: bool
    created_at: Optional[datetime] = None
