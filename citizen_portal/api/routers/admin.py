"""Administrative endpoints: account listing, moderation and audit trail."""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from citizen_portal.core.security import require_permission
from citizen_portal.interfaces.http.deps import (
    build_audit_context,
    get_account_admin_service,
    get_account_service,
    get_audit_service,
    get_db_session,
)
from citizen_portal.interfaces.http.errors import api_error
from citizen_portal.modules.accounts import (
    Account as AccountDomain,
    AccountAdminService,
    AccountNotFoundError,
    AccountService,
    AccountStateError,
    Permission,
)
from citizen_portal.modules.audit import AuditService
from citizen_portal.schemas import (
    AccountListPayload,
    AccountProfile,
    AccountStatsResponse,
    ApiResponse,
    AuditEntryResponse,
    ProfilePayload,
    ReactivateRequest,
    SuspendRequest,
)

router = APIRouter()


@router.get("/users", response_model=ApiResponse[AccountListPayload])
async def list_users(
    status_filter: Optional[str] = Query(default=None, alias="status"),
    role: Optional[str] = None,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=500),
    admin: AccountDomain = Depends(require_permission(Permission.READ_USERS)),
    account_service: AccountService = Depends(get_account_service),
):
    accounts = await account_service.list_accounts(status=status_filter, role=role, skip=skip, limit=limit)
    return ApiResponse[AccountListPayload](
        data=AccountListPayload(
            users=[AccountProfile.from_account(account) for account in accounts],
            skip=skip,
            limit=limit,
        )
    )


@router.get("/stats", response_model=ApiResponse[AccountStatsResponse])
async def account_stats(
    admin: AccountDomain = Depends(require_permission(Permission.READ_ANALYTICS)),
    account_service: AccountService = Depends(get_account_service),
):
    stats = await account_service.stats()
    return ApiResponse[AccountStatsResponse](data=AccountStatsResponse.model_validate(stats))


@router.post("/users/{account_id}/suspend", response_model=ApiResponse[ProfilePayload])
async def suspend_user(
    account_id: str,
    payload: SuspendRequest,
    request: Request,
    db: AsyncSession = Depends(get_db_session),
    admin: AccountDomain = Depends(require_permission(Permission.WRITE_USERS)),
    admin_service: AccountAdminService = Depends(get_account_admin_service),
):
    try:
        account = await admin_service.suspend(
            account_id,
            reason=payload.reason,
            context=build_audit_context(request, admin),
        )
    except AccountNotFoundError as exc:
        raise api_error(status.HTTP_404_NOT_FOUND, "User not found") from exc
    except AccountStateError as exc:
        raise api_error(status.HTTP_400_BAD_REQUEST, str(exc)) from exc
    await db.commit()
    return ApiResponse[ProfilePayload](
        message="User suspended successfully",
        data=ProfilePayload(user=AccountProfile.from_account(account)),
    )


@router.post("/users/{account_id}/reactivate", response_model=ApiResponse[ProfilePayload])
async def reactivate_user(
    account_id: str,
    request: Request,
    payload: Optional[ReactivateRequest] = None,
    db: AsyncSession = Depends(get_db_session),
    admin: AccountDomain = Depends(require_permission(Permission.WRITE_USERS)),
    admin_service: AccountAdminService = Depends(get_account_admin_service),
):
    try:
        account = await admin_service.reactivate(
            account_id,
            reason=payload.reason if payload else None,
            context=build_audit_context(request, admin),
        )
    except AccountNotFoundError as exc:
        raise api_error(status.HTTP_404_NOT_FOUND, "User not found") from exc
    except AccountStateError as exc:
        raise api_error(status.HTTP_400_BAD_REQUEST, str(exc)) from exc
    await db.commit()
    return ApiResponse[ProfilePayload](
        message="User reactivated successfully",
        data=ProfilePayload(user=AccountProfile.from_account(account)),
    )


@router.post("/users/{account_id}/unlock", response_model=ApiResponse[ProfilePayload])
async def unlock_user(
    account_id: str,
    request: Request,
    db: AsyncSession = Depends(get_db_session),
    admin: AccountDomain = Depends(require_permission(Permission.WRITE_USERS)),
    admin_service: AccountAdminService = Depends(get_account_admin_service),
):
    try:
        account = await admin_service.unlock(account_id, context=build_audit_context(request, admin))
    except AccountNotFoundError as exc:
        raise api_error(status.HTTP_404_NOT_FOUND, "User not found") from exc
    await db.commit()
    return ApiResponse[ProfilePayload](
        message="User unlocked successfully",
        data=ProfilePayload(user=AccountProfile.from_account(account)),
    )


@router.get("/audit-logs", response_model=ApiResponse[List[AuditEntryResponse]])
async def list_audit_logs(
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=500),
    admin: AccountDomain = Depends(require_permission(Permission.VIEW_AUDIT_LOGS)),
    audit_service: AuditService = Depends(get_audit_service),
):
    entries = await audit_service.list_entries(skip=skip, limit=limit)
    return ApiResponse[List[AuditEntryResponse]](
        data=[AuditEntryResponse.model_validate(entry) for entry in entries]
    )
