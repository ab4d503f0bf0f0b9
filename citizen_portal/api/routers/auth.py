"""Authentication endpoints: registration, login with lockout, profile and password management."""
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from citizen_portal.core.container import ApplicationContainer
from citizen_portal.core.security import get_current_account
from citizen_portal.core.tokens import EMAIL_VERIFICATION_TOKEN, TokenError
from citizen_portal.interfaces.http.deps import (
    get_account_service,
    get_app_container,
    get_authentication_service,
    get_db_session,
    get_notification_service,
)
from citizen_portal.interfaces.http.errors import api_error
from citizen_portal.modules.accounts import (
    Account as AccountDomain,
    AccountAlreadyExistsError,
    AccountCreateInput,
    AccountDeactivatedError,
    AccountLockedError,
    AccountNotFoundError,
    AccountService,
    AccountSuspendedError,
    AuthenticationError,
    AuthenticationService,
    IncorrectPasswordError,
    ProfileUpdateInput,
)
from citizen_portal.modules.accounts.models import UNSET
from citizen_portal.modules.notifications import NotificationService
from citizen_portal.modules.notifications.mailer import verification_email, welcome_email
from citizen_portal.schemas import (
    AccountProfile,
    ApiResponse,
    AuthPayload,
    ChangePasswordRequest,
    LoginRequest,
    ProfilePayload,
    ProfileUpdate,
    RegisterRequest,
    SuccessResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _login_failure(exc: AuthenticationError) -> Exception:
    if isinstance(exc, AccountLockedError):
        return api_error(
            status.HTTP_429_TOO_MANY_REQUESTS,
            exc.message,
            "ACCOUNT_LOCKED",
            headers={"Retry-After": str(exc.retry_after)},
        )
    if isinstance(exc, AccountSuspendedError):
        return api_error(status.HTTP_403_FORBIDDEN, exc.message, "ACCOUNT_SUSPENDED")
    if isinstance(exc, AccountDeactivatedError):
        return api_error(status.HTTP_401_UNAUTHORIZED, exc.message, "ACCOUNT_DEACTIVATED")
    return api_error(status.HTTP_401_UNAUTHORIZED, exc.message, "INVALID_CREDENTIALS")


@router.post(
    "/register",
    response_model=ApiResponse[AuthPayload],
    status_code=status.HTTP_201_CREATED,
    summary="Register a citizen account",
)
async def register(
    payload: RegisterRequest,
    db: AsyncSession = Depends(get_db_session),
    container: ApplicationContainer = Depends(get_app_container),
    account_service: AccountService = Depends(get_account_service),
    notification_service: NotificationService = Depends(get_notification_service),
):
    try:
        account = await account_service.register(
            AccountCreateInput(
                email=payload.email,
                password=payload.password,
                first_name=payload.first_name,
                last_name=payload.last_name,
                role=payload.role.value,
                phone_number=payload.phone_number,
                date_of_birth=payload.date_of_birth,
                address=payload.address,
            )
        )
    except AccountAlreadyExistsError as exc:
        raise api_error(status.HTTP_400_BAD_REQUEST, "User with this email already exists") from exc
    await db.commit()

    token = container.token_issuer.issue(account.id)

    verification_token = container.token_issuer.issue(account.id, token_type=EMAIL_VERIFICATION_TOKEN)
    verification_url = f"{container.settings.email.frontend_url}/verify-email/{verification_token}"
    if not await notification_service.send_email(account.email, welcome_email(account.first_name)):
        logger.warning("Welcome email was not delivered to %s", account.email)
    if not await notification_service.send_email(
        account.email, verification_email(account.first_name, verification_url)
    ):
        logger.warning("Verification email was not delivered to %s", account.email)

    return ApiResponse[AuthPayload](
        message="User registered successfully",
        data=AuthPayload(user=AccountProfile.from_account(account), token=token),
    )


@router.post("/login", response_model=ApiResponse[AuthPayload], summary="Password login with lockout")
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
    auth_service: AuthenticationService = Depends(get_authentication_service),
):
    failure: AuthenticationError | None = None
    try:
        try:
            result = await auth_service.login(payload.email, payload.password)
        except AuthenticationError as exc:
            failure = exc
        # Counter changes are made durable before any response goes out.
        await db.commit()
    except Exception as exc:
        logger.exception("Login error")
        await db.rollback()
        raise api_error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Login failed") from exc

    if failure is not None:
        raise _login_failure(failure)

    return ApiResponse[AuthPayload](
        message="Login successful",
        data=AuthPayload(user=AccountProfile.from_account(result.account), token=result.token),
    )


@router.post("/logout", response_model=SuccessResponse, summary="Log out (stateless)")
async def logout():
    return SuccessResponse(message="Logout successful")


@router.get("/profile", response_model=ApiResponse[ProfilePayload], summary="Current account profile")
async def get_profile(account: AccountDomain = Depends(get_current_account)):
    return ApiResponse[ProfilePayload](data=ProfilePayload(user=AccountProfile.from_account(account)))


@router.put("/profile", response_model=ApiResponse[ProfilePayload], summary="Update profile")
async def update_profile(
    payload: ProfileUpdate,
    db: AsyncSession = Depends(get_db_session),
    account: AccountDomain = Depends(get_current_account),
    account_service: AccountService = Depends(get_account_service),
):
    provided = payload.model_fields_set
    changes = ProfileUpdateInput(
        first_name=payload.first_name if "first_name" in provided and payload.first_name else UNSET,
        last_name=payload.last_name if "last_name" in provided and payload.last_name else UNSET,
        phone_number=payload.phone_number if "phone_number" in provided else UNSET,
        date_of_birth=payload.date_of_birth if "date_of_birth" in provided else UNSET,
        address=payload.address if "address" in provided else UNSET,
    )
    updated = await account_service.update_profile(account.id, changes)
    await db.commit()
    logger.info("Profile updated for user %s", account.id)
    return ApiResponse[ProfilePayload](
        message="Profile updated successfully",
        data=ProfilePayload(user=AccountProfile.from_account(updated)),
    )


@router.put("/change-password", response_model=SuccessResponse, summary="Change password")
async def change_password(
    payload: ChangePasswordRequest,
    db: AsyncSession = Depends(get_db_session),
    account: AccountDomain = Depends(get_current_account),
    account_service: AccountService = Depends(get_account_service),
):
    try:
        await account_service.change_password(account.id, payload.current_password, payload.new_password)
    except IncorrectPasswordError as exc:
        raise api_error(status.HTTP_400_BAD_REQUEST, "Current password is incorrect") from exc
    await db.commit()
    logger.info("Password changed for user %s", account.id)
    return SuccessResponse(message="Password changed successfully")


@router.get("/verify-email/{token}", response_model=SuccessResponse, summary="Confirm an email address")
async def verify_email(
    token: str,
    db: AsyncSession = Depends(get_db_session),
    container: ApplicationContainer = Depends(get_app_container),
    account_service: AccountService = Depends(get_account_service),
):
    try:
        account_id = container.token_issuer.decode(token, token_type=EMAIL_VERIFICATION_TOKEN)
        await account_service.mark_verified(account_id)
    except (TokenError, AccountNotFoundError) as exc:
        raise api_error(status.HTTP_400_BAD_REQUEST, "Invalid or expired verification token") from exc
    await db.commit()
    return SuccessResponse(message="Email verified successfully")
