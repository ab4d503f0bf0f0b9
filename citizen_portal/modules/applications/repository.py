"""Repository protocol for service applications."""

from __future__ import annotations

from typing import Any, Protocol, Sequence

from .models import Application


class ApplicationRepository(Protocol):
    async def reference_exists(self, reference_number: str) -> bool:
        ...

    async def create_application(
        self,
        *,
        reference_number: str,
        applicant_id: str,
        service_type: str,
        status: str,
        details: dict[str, Any],
    ) -> Application:
        ...

    async def get_by_id(self, application_id: str) -> Application | None:
        ...

    async def list_for_applicant(self, applicant_id: str) -> Sequence[Application]:
        ...
