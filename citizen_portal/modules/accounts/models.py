"""Domain models for accounts."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional


class AccountStatus(str, Enum):
    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"
    INACTIVE = "INACTIVE"


class Role(str, Enum):
    CITIZEN = "CITIZEN"
    STAFF = "STAFF"
    ADMIN = "ADMIN"


@dataclass(slots=True)
class Account:
    id: str
    email: str
    first_name: str
    last_name: str
    role: str
    is_active: bool
    password_hash: str = field(repr=False)
    status: str = AccountStatus.ACTIVE.value
    is_verified: bool = False
    failed_login_attempts: int = 0
    lockout_until: Optional[datetime] = None
    last_login_at: Optional[datetime] = None
    phone_number: Optional[str] = None
    date_of_birth: Optional[date] = None
    address: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def is_staff(self) -> bool:
        return self.role in {Role.STAFF.value, Role.ADMIN.value}

    def is_suspended(self) -> bool:
        return self.status == AccountStatus.SUSPENDED.value


@dataclass(slots=True)
class AccountCreateInput:
    email: str
    password: str
    first_name: str
    last_name: str
    role: str = Role.CITIZEN.value
    phone_number: Optional[str] = None
    date_of_birth: Optional[date] = None
    address: Optional[str] = None


# Sentinel used to differentiate between "not provided" and explicit None.
UNSET = object()


@dataclass(slots=True)
class ProfileUpdateInput:
    first_name: Optional[str] | object = UNSET
    last_name: Optional[str] | object = UNSET
    phone_number: Optional[str] | object = UNSET
    date_of_birth: Optional[date] | object = UNSET
    address: Optional[str] | object = UNSET

    def changes(self) -> dict[str, object]:
        values = {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "phone_number": self.phone_number,
            "date_of_birth": self.date_of_birth,
            "address": self.address,
        }
        return {name: value for name, value in values.items() if value is not UNSET}


@dataclass(slots=True)
class AccountStats:
    total: int
    active: int
    suspended: int
    locked: int


def normalize_email(value: str) -> str:
    return (value or "").strip().lower()
