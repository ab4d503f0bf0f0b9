"""Service application submission and lookup."""
import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from citizen_portal.core.security import require_permission
from citizen_portal.interfaces.http.deps import get_application_service, get_db_session
from citizen_portal.interfaces.http.errors import api_error
from citizen_portal.modules.accounts import Account as AccountDomain, Permission
from citizen_portal.modules.applications import (
    ApplicationNotFoundError,
    ApplicationService,
    ReferenceAllocationError,
)
from citizen_portal.schemas import ApiResponse, ApplicationCreate, ApplicationResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=ApiResponse[ApplicationResponse], status_code=status.HTTP_201_CREATED)
async def submit_application(
    payload: ApplicationCreate,
    db: AsyncSession = Depends(get_db_session),
    account: AccountDomain = Depends(require_permission(Permission.WRITE_APPLICATIONS)),
    application_service: ApplicationService = Depends(get_application_service),
):
    try:
        application = await application_service.submit(account.id, payload.service_type, payload.details)
    except ReferenceAllocationError as exc:
        logger.error("Reference allocation failed for %s: %s", payload.service_type.value, exc)
        raise api_error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to generate a unique reference number",
        ) from exc
    await db.commit()
    return ApiResponse[ApplicationResponse](
        message="Application submitted successfully",
        data=ApplicationResponse.model_validate(application),
    )


@router.get("", response_model=ApiResponse[List[ApplicationResponse]])
async def list_my_applications(
    account: AccountDomain = Depends(require_permission(Permission.READ_APPLICATIONS)),
    application_service: ApplicationService = Depends(get_application_service),
):
    applications = await application_service.list_for_applicant(account.id)
    return ApiResponse[List[ApplicationResponse]](
        data=[ApplicationResponse.model_validate(item) for item in applications]
    )


@router.get("/{application_id}", response_model=ApiResponse[ApplicationResponse])
async def get_application(
    application_id: str,
    account: AccountDomain = Depends(require_permission(Permission.READ_APPLICATIONS)),
    application_service: ApplicationService = Depends(get_application_service),
):
    try:
        application = await application_service.get_for_viewer(application_id, account)
    except ApplicationNotFoundError as exc:
        raise api_error(status.HTTP_404_NOT_FOUND, "Application not found") from exc
    return ApiResponse[ApplicationResponse](data=ApplicationResponse.model_validate(application))
