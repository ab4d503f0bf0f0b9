"""SQLAlchemy repository for service applications."""

from __future__ import annotations

import json
from typing import Any, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from citizen_portal.db.models import Application as ApplicationModel
from citizen_portal.modules.applications.models import Application


class SqlApplicationRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def reference_exists(self, reference_number: str) -> bool:
        stmt = select(ApplicationModel.id).where(ApplicationModel.reference_number == reference_number)
        result = await self._session.execute(stmt)
        return result.first() is not None

    async def create_application(
        self,
        *,
        reference_number: str,
        applicant_id: str,
        service_type: str,
        status: str,
        details: dict[str, Any],
    ) -> Application:
        model = ApplicationModel(
            reference_number=reference_number,
            applicant_id=applicant_id,
            service_type=service_type,
            status=status,
            details=json.dumps(details, ensure_ascii=False) if details else None,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def get_by_id(self, application_id: str) -> Application | None:
        stmt = select(ApplicationModel).where(ApplicationModel.id == application_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model else None

    async def list_for_applicant(self, applicant_id: str) -> Sequence[Application]:
        stmt = (
            select(ApplicationModel)
            .where(ApplicationModel.applicant_id == applicant_id)
            .order_by(ApplicationModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    @staticmethod
    def _to_domain(model: ApplicationModel) -> Application:
        details: dict[str, Any] = {}
        if model.details:
            try:
                details = json.loads(model.details)
            except json.JSONDecodeError:
                details = {}
        return Application(
            id=str(model.id),
            reference_number=model.reference_number,
            applicant_id=model.applicant_id,
            service_type=model.service_type,
            status=model.status,
            details=details,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
