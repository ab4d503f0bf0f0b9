"""Service application workflows."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from citizen_portal.modules.accounts.models import Account
from citizen_portal.modules.accounts.permissions import Permission, has_permission

from .exceptions import ApplicationNotFoundError
from .models import Application, ApplicationStatus, ServiceType
from .reference import MAX_ATTEMPTS, generate_reference_number, generate_unique
from .repository import ApplicationRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ApplicationService:
    repository: ApplicationRepository
    max_attempts: int = MAX_ATTEMPTS
    reference_factory: Callable[[str], str] = field(default=generate_reference_number)

    @classmethod
    def with_session(cls, session: AsyncSession, max_attempts: int = MAX_ATTEMPTS) -> "ApplicationService":
        from citizen_portal.infrastructure.database.repositories.application_repository import (
            SqlApplicationRepository,
        )

        return cls(SqlApplicationRepository(session), max_attempts=max_attempts)

    async def submit(
        self,
        applicant_id: str,
        service_type: ServiceType,
        details: Optional[dict[str, Any]] = None,
    ) -> Application:
        prefix = service_type.reference_prefix
        reference_number = await generate_unique(
            lambda: self.reference_factory(prefix),
            self.repository.reference_exists,
            self.max_attempts,
        )
        application = await self.repository.create_application(
            reference_number=reference_number,
            applicant_id=applicant_id,
            service_type=service_type.value,
            status=ApplicationStatus.SUBMITTED.value,
            details=details or {},
        )
        logger.info(
            "Application %s (%s) submitted by user %s",
            application.reference_number,
            service_type.value,
            applicant_id,
        )
        return application

    async def list_for_applicant(self, applicant_id: str) -> Sequence[Application]:
        return await self.repository.list_for_applicant(applicant_id)

    async def get_for_viewer(self, application_id: str, viewer: Account) -> Application:
        application = await self.repository.get_by_id(application_id)
        if application is None:
            raise ApplicationNotFoundError(application_id)
        if application.applicant_id == viewer.id:
            return application
        if viewer.is_staff() and has_permission(viewer.role, Permission.READ_APPLICATIONS):
            return application
        raise ApplicationNotFoundError(application_id)
