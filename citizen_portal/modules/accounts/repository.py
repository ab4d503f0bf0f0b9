"""Repository protocol for accounts."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional, Protocol, Sequence

from .models import Account


class AccountRepository(Protocol):
    """Abstract repository interface for account persistence."""

    async def get_by_id(self, account_id: str) -> Account | None:
        ...

    async def get_by_email(self, email: str) -> Account | None:
        """Case-insensitive lookup."""
        ...

    async def list_accounts(
        self,
        *,
        status: Optional[str] = None,
        role: Optional[str] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> Sequence[Account]:
        ...

    async def count_accounts(
        self,
        *,
        status: Optional[str] = None,
        locked_at: Optional[datetime] = None,
    ) -> int:
        """Count accounts, optionally only those whose lockout is still running at ``locked_at``."""
        ...

    async def create_account(
        self,
        *,
        email: str,
        password_hash: str,
        first_name: str,
        last_name: str,
        role: str,
        phone_number: Optional[str],
        date_of_birth: Optional[date],
        address: Optional[str],
    ) -> Account:
        ...

    async def update_account(self, account_id: str, **changes: Any) -> Account:
        """Apply ``changes`` to a single account row and return the updated account."""
        ...
