"""Bearer token authentication and permission guards."""
import logging
from typing import Awaitable, Callable, Optional

from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from citizen_portal.core.container import ApplicationContainer
from citizen_portal.core.tokens import TokenExpiredError, TokenError
from citizen_portal.interfaces.http.deps import get_account_service, get_app_container
from citizen_portal.interfaces.http.errors import api_error
from citizen_portal.modules.accounts.models import Account as AccountDomain
from citizen_portal.modules.accounts.permissions import Permission, has_permission
from citizen_portal.modules.accounts.service import AccountService

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


async def get_current_account(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    container: ApplicationContainer = Depends(get_app_container),
    account_service: AccountService = Depends(get_account_service),
) -> AccountDomain:
    if credentials is None or not credentials.credentials:
        raise api_error(status.HTTP_401_UNAUTHORIZED, "Access token is required", "TOKEN_REQUIRED")

    try:
        account_id = container.token_issuer.decode(credentials.credentials)
    except TokenExpiredError as exc:
        raise api_error(status.HTTP_401_UNAUTHORIZED, "Token has expired", "TOKEN_EXPIRED") from exc
    except TokenError as exc:
        raise api_error(status.HTTP_401_UNAUTHORIZED, "Invalid token", "INVALID_TOKEN") from exc

    account = await account_service.get_by_id(account_id)
    if account is None:
        raise api_error(status.HTTP_401_UNAUTHORIZED, "User not found", "USER_NOT_FOUND")
    if not account.is_active:
        raise api_error(status.HTTP_401_UNAUTHORIZED, "Account is deactivated", "ACCOUNT_DEACTIVATED")
    if account.is_suspended():
        raise api_error(status.HTTP_403_FORBIDDEN, "Account is suspended", "ACCOUNT_SUSPENDED")
    return account


def require_permission(permission: Permission) -> Callable[..., Awaitable[AccountDomain]]:
    async def dependency(account: AccountDomain = Depends(get_current_account)) -> AccountDomain:
        if not has_permission(account.role, permission):
            logger.warning("User %s lacks permission %s", account.id, permission.value)
            raise api_error(status.HTTP_403_FORBIDDEN, "Insufficient permissions", "INSUFFICIENT_PERMISSIONS")
        return account

    return dependency


__all__ = [
    "get_current_account",
    "require_permission",
    "security",
]
