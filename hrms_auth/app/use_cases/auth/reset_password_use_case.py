"""
Reset Password Use Case

Consumes a reset token and sets the new password.
"""

import logging
from typing import Optional

from hrms_auth.app.services.credential_store import (
    MAX_PASSWORD_BYTES,
    CredentialStore,
    hash_password,
)
from hrms_auth.app.services.security_log import log_security_event
from hrms_auth.app.services.unit_of_work import UnitOfWork
from hrms_auth.result import Error, Result, Return
from hrms_auth.settings import AuthSettings
from .dtos import ResetPasswordResponse
from .errors import INTERNAL_ERROR, INVALID_PASSWORD, reset_token_invalid
from .validate_reset_link_use_case import find_valid_reset_request

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


class ResetPasswordUseCase:
    """
    Use case for completing a password reset.

    Business Rules:
    - Token is re-validated (existence + age) at completion time
    - Optional email must match the email the token was issued for
    - Subject must still exist and be ACTIVE
    - Every token failure is reported as RESET_TOKEN_INVALID
    - Single-use: the request row is deleted; a concurrent consumer that finds
      nothing to delete loses
    - Active sessions are left alone
    """

    def __init__(self, uow: UnitOfWork, settings: AuthSettings):
        self.uow = uow
        self.settings = settings

    def _validate_password(self, password: str) -> Result[None]:
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            return Return.err(
                Error(
                    INVALID_PASSWORD,
                    f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
                )
            )
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            return Return.err(
                Error(
                    INVALID_PASSWORD,
                    f"Password must be at most {MAX_PASSWORD_BYTES} bytes long",
                )
            )
        return Return.ok(None)

    async def execute(
        self, token: str, new_password: str, email: Optional[str] = None
    ) -> Result[ResetPasswordResponse]:
        """
        Execute reset password use case.

        Errors:
            - INVALID_PASSWORD: Password shorter than 8 characters or longer than 72 bytes
            - RESET_TOKEN_INVALID: Token missing, expired, mismatched or subject unusable
            - INTERNAL_ERROR: Credential row could not be updated
        """
        password_validation = self._validate_password(new_password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        async with self.uow:
            request = await find_valid_reset_request(
                self.uow, token, self.settings.password_reset_ttl
            )
            if request is None:
                return Return.err(reset_token_invalid())

            if email and email.strip().lower() != request.email.lower():
                log_security_event("RESET_EMAIL_MISMATCH", "high", request_id=request.id)
                return Return.err(reset_token_invalid())

            credentials = CredentialStore(self.uow)
            account = await credentials.find_account(request.email)
            if account is None or not account.is_active:
                log_security_event(
                    "RESET_SUBJECT_UNAVAILABLE", "medium",
                    request_id=request.id,
                    reason="missing" if account is None else "inactive",
                )
                return Return.err(reset_token_invalid())

            new_hash = hash_password(new_password, self.settings.bcrypt_rounds)
            rows = await credentials.set_password(
                account.subject_type, account.subject_id, new_hash
            )
            if rows == 0:
                return Return.err(Error(INTERNAL_ERROR, "Failed to update password."))

            consumed = await self.uow.password_resets.delete_by_email(request.email)
            if consumed == 0:
                # Consumed concurrently
                await self.uow.rollback()
                return Return.err(reset_token_invalid())

            await self.uow.commit()

            logger.info(
                f"Password reset completed for {account.subject_type.value} {account.subject_id}"
            )
            return Return.ok(
                ResetPasswordResponse(
                    status="success",
                    message="Password has been reset successfully",
                )
            )
