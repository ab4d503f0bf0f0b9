"""Account domain specific exceptions."""

from __future__ import annotations

from datetime import datetime


class AccountError(Exception):
    """Base class for account domain errors."""


class AccountAlreadyExistsError(AccountError):
    """Raised when attempting to register an email that is already taken."""


class AccountNotFoundError(AccountError):
    """Raised when the requested account cannot be found."""


class AccountStateError(AccountError):
    """Raised when an admin action does not apply to the account's current status."""


class IncorrectPasswordError(AccountError):
    """Raised when a password change is attempted with the wrong current password."""


class AuthenticationError(AccountError):
    """Base class for rejected login attempts. ``message`` is safe to show to the caller."""

    message = "Authentication failed"

    def __init__(self) -> None:
        super().__init__(self.message)


class InvalidCredentialsError(AuthenticationError):
    """Unknown email or wrong password. Both cases share one message."""

    message = "Invalid email or password"


class AccountLockedError(AuthenticationError):
    message = "Account is locked due to too many failed login attempts. Please try again later."

    def __init__(self, locked_until: datetime, retry_after: int) -> None:
        self.locked_until = locked_until
        self.retry_after = retry_after
        super().__init__()


class AccountDeactivatedError(AuthenticationError):
    message = "Account is deactivated. Please contact support."


class AccountSuspendedError(AuthenticationError):
    message = "Account is suspended. Please contact support."
