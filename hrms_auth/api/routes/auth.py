from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import BaseModel, EmailStr, Field

from hrms_auth.api.error import ClientError, ServerError
from hrms_auth.api.utils.client_metadata import get_client_metadata
from hrms_auth.api.utils.cookies import (
    clear_refresh_cookie,
    read_refresh_cookie,
    set_refresh_cookie,
)
from hrms_auth.app.services.email_sender import IEmailSender
from hrms_auth.app.services.field_cipher import FieldCipher
from hrms_auth.app.services.token_issuer import TokenIssuer
from hrms_auth.app.services.unit_of_work import UnitOfWork
from hrms_auth.app.use_cases.auth import (
    AccessTokenResponse,
    ExtendSessionUseCase,
    LoginUseCase,
    LogoutResponse,
    LogoutUseCase,
    RequestPasswordResetResponse,
    RequestPasswordResetUseCase,
    ResetPasswordResponse,
    ResetPasswordUseCase,
    ValidateResetLinkResponse,
    ValidateResetLinkUseCase,
)
from hrms_auth.app.use_cases.auth import errors
from hrms_auth.depends import (
    get_email_sender,
    get_field_cipher,
    get_settings,
    get_token_issuer,
    get_unit_of_work,
)
from hrms_auth.settings import AuthSettings

router = APIRouter(prefix="/auth", tags=["Authentication"])


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    Employees sign in with their official email, customers with their account email.
    """

    email: EmailStr = Field(..., description="Login email")
    password: str = Field(..., min_length=1, description="Account password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=AccessTokenResponse)
async def login(
    payload: LoginRequest,
    request: Request,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
    settings: AuthSettings = Depends(get_settings),
):
    """
    Login

    Authenticates an employee or customer. The access token is returned in the
    body; the refresh secret is set as an httpOnly cookie.

    Raises:
        - 401 Unauthorized: INVALID_CREDENTIALS
        - 500 Internal Server Error: Server error
    """
    client = get_client_metadata(request)
    use_case = LoginUseCase(uow, token_issuer, settings.refresh_token_ttl)
    result = await use_case.execute(
        payload.email, payload.password, client.user_agent, client.ip_address
    )

    if result.is_err():
        error = result.error
        if error.code == errors.INVALID_CREDENTIALS:
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    issued = result.value
    set_refresh_cookie(response, settings, issued.refresh_token, issued.refresh_max_age)
    return issued.response


@router.post(
    "/extend-session", status_code=status.HTTP_200_OK, response_model=AccessTokenResponse
)
async def extend_session(
    request: Request,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
    settings: AuthSettings = Depends(get_settings),
):
    """
    Extend Session

    Rotates the refresh cookie and returns a fresh access token. A secret that
    has already been rotated, revoked or has expired requires a new login.

    Raises:
        - 401 Unauthorized: SESSION_NOT_FOUND
        - 500 Internal Server Error: Server error
    """
    use_case = ExtendSessionUseCase(uow, token_issuer, settings.refresh_token_ttl)
    result = await use_case.execute(read_refresh_cookie(request, settings))

    if result.is_err():
        error = result.error
        if error.code == errors.SESSION_NOT_FOUND:
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    issued = result.value
    set_refresh_cookie(response, settings, issued.refresh_token, issued.refresh_max_age)
    return issued.response


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(
    request: Request,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
    settings: AuthSettings = Depends(get_settings),
):
    """
    Logout

    Revokes the session behind the refresh cookie, if any, and always clears
    the cookie. Never fails.
    """
    use_case = LogoutUseCase(uow, token_issuer)
    result = await use_case.execute(read_refresh_cookie(request, settings))

    clear_refresh_cookie(response, settings)
    return result.value


class GenerateResetLinkRequest(BaseModel):
    """Password reset request payload"""

    email: EmailStr = Field(..., description="Account email")


@router.post(
    "/generate-reset-link",
    status_code=status.HTTP_200_OK,
    response_model=RequestPasswordResetResponse,
)
async def generate_reset_link(
    payload: GenerateResetLinkRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    cipher: FieldCipher = Depends(get_field_cipher),
    email_sender: IEmailSender = Depends(get_email_sender),
    settings: AuthSettings = Depends(get_settings),
):
    """
    Request Password Reset

    Always answers with the same message whether or not the email exists.

    Raises:
        - 403 Forbidden: DEACTIVATED_ACCOUNT
    """
    use_case = RequestPasswordResetUseCase(uow, cipher, email_sender, settings)
    result = await use_case.execute(payload.email)

    if result.is_err():
        error = result.error
        if error.code == errors.DEACTIVATED_ACCOUNT:
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value


class ValidateResetLinkRequest(BaseModel):
    """Reset link validation payload"""

    token: str = Field(..., min_length=1, description="Encrypted reset token from the link")


@router.post(
    "/validate-reset-link",
    status_code=status.HTTP_200_OK,
    response_model=ValidateResetLinkResponse,
)
async def validate_reset_link(
    payload: ValidateResetLinkRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_settings),
):
    """
    Validate Reset Link

    Raises:
        - 400 Bad Request: RESET_TOKEN_INVALID (unknown or expired)
    """
    use_case = ValidateResetLinkUseCase(uow, settings.password_reset_ttl)
    result = await use_case.execute(payload.token)

    if result.is_err():
        error = result.error
        if error.code == errors.RESET_TOKEN_INVALID:
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


class ResetPasswordRequest(BaseModel):
    """Password reset completion payload"""

    token: str = Field(..., min_length=1, description="Encrypted reset token from the link")
    password: str = Field(..., description="New password (8 chars to 72 bytes)")
    email: Optional[EmailStr] = Field(None, description="Email the link was sent to")


@router.post(
    "/reset-password", status_code=status.HTTP_200_OK, response_model=ResetPasswordResponse
)
async def reset_password(
    payload: ResetPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_settings),
):
    """
    Reset Password

    Consumes the reset token and sets the new password.

    Raises:
        - 400 Bad Request: RESET_TOKEN_INVALID
        - 422 Unprocessable Entity: INVALID_PASSWORD
        - 500 Internal Server Error: Password could not be written
    """
    use_case = ResetPasswordUseCase(uow, settings)
    result = await use_case.execute(payload.token, payload.password, payload.email)

    if result.is_err():
        error = result.error
        if error.code == errors.RESET_TOKEN_INVALID:
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == errors.INVALID_PASSWORD:
            raise ClientError(error, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)
        raise ServerError(error)

    return result.value
