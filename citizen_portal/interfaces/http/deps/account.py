"""Account related dependency providers."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from citizen_portal.core.container import ApplicationContainer, get_container
from citizen_portal.infrastructure.database.repositories.account_repository import SqlAccountRepository
from citizen_portal.modules.accounts.admin import AccountAdminService
from citizen_portal.modules.accounts.authentication import AuthenticationService
from citizen_portal.modules.accounts.service import AccountService

from .database import get_db_session


def get_app_container() -> ApplicationContainer:
    return get_container()


def get_account_repository(db: AsyncSession = Depends(get_db_session)) -> SqlAccountRepository:
    return SqlAccountRepository(db)


def get_account_service(
    repository: SqlAccountRepository = Depends(get_account_repository),
    container: ApplicationContainer = Depends(get_app_container),
) -> AccountService:
    return AccountService(repository, container.hasher)


def get_authentication_service(
    repository: SqlAccountRepository = Depends(get_account_repository),
    container: ApplicationContainer = Depends(get_app_container),
) -> AuthenticationService:
    return AuthenticationService(
        repository,
        container.hasher,
        container.token_issuer,
        container.lockout_policy,
    )


def get_account_admin_service(
    db: AsyncSession = Depends(get_db_session),
    container: ApplicationContainer = Depends(get_app_container),
) -> AccountAdminService:
    return AccountAdminService.with_session(db, container.mailer)


__all__ = [
    "get_account_admin_service",
    "get_account_repository",
    "get_account_service",
    "get_app_container",
    "get_authentication_service",
]
