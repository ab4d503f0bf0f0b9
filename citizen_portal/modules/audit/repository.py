"""Repository protocol for audit entries."""

from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from .models import AuditEntry


class AuditRepository(Protocol):
    async def add_entry(
        self,
        *,
        action: str,
        actor_id: Optional[str],
        entity: Optional[str],
        entity_id: Optional[str],
        details: Optional[dict[str, Any]],
        ip_address: Optional[str],
        user_agent: Optional[str],
    ) -> AuditEntry:
        ...

    async def list_entries(self, *, skip: int = 0, limit: int = 50) -> Sequence[AuditEntry]:
        ...
