"""Pydantic schemas used across the project."""
import re
from datetime import date, datetime
from typing import Annotated, Any, Generic, Optional, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field, field_validator

from citizen_portal.modules.accounts.models import Account, AccountStatus, Role
from citizen_portal.modules.applications.models import ServiceType

T = TypeVar("T")

PASSWORD_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[!@#$%^&*]).{8,}$")
NAME_PATTERN = re.compile(r"^[a-zA-Z\s]+$")
PHONE_PATTERN = re.compile(r"^\+?[\d\s\-\(\)]{10,15}$")


def _check_password(value: str) -> str:
    if not PASSWORD_PATTERN.match(value):
        raise ValueError(
            "Password must be at least 8 characters and contain at least one lowercase letter, "
            "one uppercase letter, one number, and one special character"
        )
    return value


def _check_name(value: str) -> str:
    value = value.strip()
    if not 2 <= len(value) <= 50:
        raise ValueError("Name must be between 2 and 50 characters")
    if not NAME_PATTERN.match(value):
        raise ValueError("Name can only contain letters and spaces")
    return value


def _check_phone(value: Optional[str]) -> Optional[str]:
    if value is None or value == "":
        return None
    if not PHONE_PATTERN.match(value):
        raise ValueError("Please provide a valid phone number")
    return value


def _check_birth_date(value: Optional[date]) -> Optional[date]:
    if value is not None and value > date.today():
        raise ValueError("Date of birth cannot be in the future")
    return value


Password = Annotated[str, AfterValidator(_check_password)]
PersonName = Annotated[str, AfterValidator(_check_name)]
PhoneNumber = Annotated[Optional[str], AfterValidator(_check_phone)]
BirthDate = Annotated[Optional[date], AfterValidator(_check_birth_date)]


class ApiResponse(BaseModel, Generic[T]):
    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None


class SuccessResponse(BaseModel):
    success: bool = True
    message: str


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class RegisterRequest(BaseModel):
    email: EmailStr
    password: Password
    first_name: PersonName
    last_name: PersonName
    phone_number: PhoneNumber = None
    date_of_birth: BirthDate = None
    address: Optional[str] = Field(default=None, max_length=255)
    role: Role = Role.CITIZEN

    @field_validator("role", mode="before")
    @classmethod
    def _upper_role(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @field_validator("role")
    @classmethod
    def _citizen_only(cls, value: Role) -> Role:
        # Staff and admin accounts are provisioned by init_admin.py, never self-registered.
        if value is not Role.CITIZEN:
            raise ValueError("Only citizen accounts can self-register")
        return value


class ProfileUpdate(BaseModel):
    first_name: Optional[PersonName] = None
    last_name: Optional[PersonName] = None
    phone_number: PhoneNumber = None
    date_of_birth: BirthDate = None
    address: Optional[str] = Field(default=None, max_length=255)


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: Password


class AccountProfile(BaseModel):
    """Account as exposed over the API: no password hash, lower-case role."""

    id: str
    email: str
    first_name: str
    last_name: str
    phone_number: Optional[str] = None
    date_of_birth: Optional[date] = None
    address: Optional[str] = None
    role: str
    status: str
    is_active: bool
    is_verified: bool
    failed_login_attempts: int = 0
    lockout_until: Optional[datetime] = None
    last_login_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_account(cls, account: Account) -> "AccountProfile":
        return cls(
            id=account.id,
            email=account.email,
            first_name=account.first_name,
            last_name=account.last_name,
            phone_number=account.phone_number,
            date_of_birth=account.date_of_birth,
            address=account.address,
            role=(account.role or Role.CITIZEN.value).lower(),
            status=(account.status or AccountStatus.ACTIVE.value).lower(),
            is_active=account.is_active,
            is_verified=account.is_verified,
            failed_login_attempts=account.failed_login_attempts,
            lockout_until=account.lockout_until,
            last_login_at=account.last_login_at,
            created_at=account.created_at,
            updated_at=account.updated_at,
        )


class AuthPayload(BaseModel):
    user: AccountProfile
    token: str


class ProfilePayload(BaseModel):
    user: AccountProfile


class SuspendRequest(BaseModel):
    reason: str = Field(..., min_length=1, max_length=500)


class ReactivateRequest(BaseModel):
    reason: Optional[str] = Field(default=None, max_length=500)


class AccountListPayload(BaseModel):
    users: list[AccountProfile]
    skip: int
    limit: int


class AccountStatsResponse(BaseModel):
    total: int
    active: int
    suspended: int
    locked: int

    model_config = ConfigDict(from_attributes=True)


class AuditEntryResponse(BaseModel):
    id: int
    action: str
    actor_id: Optional[str] = None
    entity: Optional[str] = None
    entity_id: Optional[str] = None
    details: Optional[dict[str, Any]] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class NotificationResponse(BaseModel):
    id: str
    title: str
    message: str
    type: str
    is_read: bool
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ApplicationCreate(BaseModel):
    service_type: ServiceType
    details: dict[str, Any] = Field(default_factory=dict)

    @field_validator("service_type", mode="before")
    @classmethod
    def _upper_service_type(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


class ApplicationResponse(BaseModel):
    id: str
    reference_number: str
    applicant_id: str
    service_type: str
    status: str
    details: dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str


__all__ = [
    "AccountListPayload",
    "AccountProfile",
    "AccountStatsResponse",
    "ApiResponse",
    "ApplicationCreate",
    "ApplicationResponse",
    "AuditEntryResponse",
    "AuthPayload",
    "ChangePasswordRequest",
    "HealthResponse",
    "LoginRequest",
    "NotificationResponse",
    "ProfilePayload",
    "ProfileUpdate",
    "ReactivateRequest",
    "RegisterRequest",
    "SuccessResponse",
    "SuspendRequest",
]
