"""Account domain services and models."""

from .admin import AccountAdminService
from .authentication import AuthenticationService, LoginResult
from .exceptions import (
    AccountAlreadyExistsError,
    AccountDeactivatedError,
    AccountError,
    AccountLockedError,
    AccountNotFoundError,
    AccountStateError,
    AccountSuspendedError,
    AuthenticationError,
    IncorrectPasswordError,
    InvalidCredentialsError,
)
from .lockout import LockoutPolicy
from .models import (
    UNSET,
    Account,
    AccountCreateInput,
    AccountStats,
    AccountStatus,
    ProfileUpdateInput,
    Role,
    normalize_email,
)
from .permissions import Permission, has_permission
from .service import AccountService

__all__ = [
    "Account",
    "AccountAdminService",
    "AccountAlreadyExistsError",
    "AccountCreateInput",
    "AccountDeactivatedError",
    "AccountError",
    "AccountLockedError",
    "AccountNotFoundError",
    "AccountService",
    "AccountStateError",
    "AccountStats",
    "AccountStatus",
    "AccountSuspendedError",
    "AuthenticationError",
    "AuthenticationService",
    "IncorrectPasswordError",
    "InvalidCredentialsError",
    "LockoutPolicy",
    "LoginResult",
    "Permission",
    "ProfileUpdateInput",
    "Role",
    "UNSET",
    "has_permission",
    "normalize_email",
]
