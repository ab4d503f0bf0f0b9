"""Human readable reference numbers such as ``OLG-ID-2026-7K3Q9Z``."""

from __future__ import annotations

import logging
import secrets
import string
from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional

from .exceptions import ReferenceAllocationError

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 5
SUFFIX_LENGTH = 6
SUFFIX_ALPHABET = string.digits + string.ascii_uppercase


def generate_reference_number(prefix: str, *, year: Optional[int] = None) -> str:
    year = year or datetime.now(timezone.utc).year
    suffix = "".join(secrets.choice(SUFFIX_ALPHABET) for _ in range(SUFFIX_LENGTH))
    return f"{prefix}-{year}-{suffix}"


async def generate_unique(
    candidate: Callable[[], str],
    exists: Callable[[str], Awaitable[bool]],
    max_attempts: int = MAX_ATTEMPTS,
) -> str:
    """Draw candidates until ``exists`` reports one as free.

    Raises ``ReferenceAllocationError`` once ``max_attempts`` candidates have all collided.
    """
    for attempt in range(1, max_attempts + 1):
        value = candidate()
        if not await exists(value):
            return value
        logger.warning("Reference number collision (%d/%d): %s", attempt, max_attempts, value)
    raise ReferenceAllocationError(max_attempts)
