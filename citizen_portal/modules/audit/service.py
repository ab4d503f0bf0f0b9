"""Audit sink. Writes are fire-and-forget: failures are logged and never reach the caller."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from .models import AuditAction, AuditContext, AuditEntry
from .repository import AuditRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AuditService:
    repository: AuditRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "AuditService":
        from citizen_portal.infrastructure.database.repositories.audit_repository import SqlAuditRepository

        return cls(SqlAuditRepository(session))

    async def record(
        self,
        action: AuditAction | str,
        *,
        context: AuditContext,
        entity: Optional[str] = None,
        entity_id: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> AuditEntry | None:
        action_name = action.value if isinstance(action, AuditAction) else action
        try:
            return await self.repository.add_entry(
                action=action_name,
                actor_id=context.actor_id,
                entity=entity,
                entity_id=entity_id,
                details=details,
                ip_address=context.ip_address,
                user_agent=context.user_agent[:255] if context.user_agent else None,
            )
        except Exception:
            logger.exception("Failed to record audit entry %s for %s %s", action_name, entity, entity_id)
            return None

    async def list_entries(self, *, skip: int = 0, limit: int = 50) -> Sequence[AuditEntry]:
        return await self.repository.list_entries(skip=skip, limit=limit)
