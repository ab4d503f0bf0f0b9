"""SQLAlchemy repository for audit entries."""

from __future__ import annotations

import json
from typing import Any, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from citizen_portal.db.models import AuditLog as AuditLogModel
from citizen_portal.modules.audit.models import AuditEntry


class SqlAuditRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

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
        model = AuditLogModel(
            action=action,
            actor_id=actor_id,
            entity=entity,
            entity_id=entity_id,
            details=json.dumps(details, ensure_ascii=False) if details else None,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        # Savepoint: a rejected row must not poison the caller's transaction.
        async with self._session.begin_nested():
            self._session.add(model)
            await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def list_entries(self, *, skip: int = 0, limit: int = 50) -> Sequence[AuditEntry]:
        stmt = (
            select(AuditLogModel)
            .order_by(AuditLogModel.created_at.desc(), AuditLogModel.id.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    @staticmethod
    def _to_domain(model: AuditLogModel) -> AuditEntry:
        details = None
        if model.details:
            try:
                details = json.loads(model.details)
            except json.JSONDecodeError:
                details = None
        return AuditEntry(
            id=int(model.id),
            action=model.action,
            actor_id=model.actor_id,
            entity=model.entity,
            entity_id=model.entity_id,
            details=details,
            ip_address=model.ip_address,
            user_agent=model.user_agent,
            created_at=model.created_at,
        )
