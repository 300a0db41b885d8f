"""
Request Password Reset Use Case

Issues a single-use reset token and mails the reset link.
"""

import logging
import secrets
import string
from urllib.parse import quote

from hrms_auth.app.services.credential_store import CredentialStore
from hrms_auth.app.services.email_sender import IEmailSender, reset_password_email
from hrms_auth.app.services.field_cipher import FieldCipher
from hrms_auth.app.services.security_log import log_security_event, preview
from hrms_auth.app.services.unit_of_work import UnitOfWork
from hrms_auth.domain.entities import PasswordResetRequest
from hrms_auth.result import Result, Return
from hrms_auth.settings import AuthSettings
from .dtos import RequestPasswordResetResponse
from .errors import deactivated_account

logger = logging.getLogger(__name__)

ALPHANUMERIC = string.ascii_letters + string.digits
LINK_NOISE_LENGTH = 10


def generate_random_string(length: int) -> str:
    return "".join(secrets.choice(ALPHANUMERIC) for _ in range(length))


def build_reset_link(frontend_url: str, encrypted_token: str) -> str:
    """Reset URL; the leading path segment is noise, the token is URL-encoded"""
    return (
        f"{frontend_url.rstrip('/')}/reset-password/"
        f"{generate_random_string(LINK_NOISE_LENGTH)}/{quote(encrypted_token, safe='')}"
    )


def _generic_response() -> RequestPasswordResetResponse:
    return RequestPasswordResetResponse(
        status="sent",
        message="If the email exists, a password reset link has been sent",
    )


class RequestPasswordResetUseCase:
    """
    Use case for requesting a password reset.

    Business Rules:
    - Unknown emails get the same response as known ones
    - Deactivated accounts are told so (the one non-generic answer)
    - The reset secret is stored encrypted; the link carries the encrypted form
    - A new request deletes any pending request for the same email
    - Email dispatch failures are logged, never returned
    """

    def __init__(
        self,
        uow: UnitOfWork,
        cipher: FieldCipher,
        email_sender: IEmailSender,
        settings: AuthSettings,
    ):
        self.uow = uow
        self.cipher = cipher
        self.email_sender = email_sender
        self.settings = settings

    async def execute(self, email: str) -> Result[RequestPasswordResetResponse]:
        try:
            return await self._execute(email)
        except Exception:
            logger.exception(f"Password reset request failed for {preview(email)}")
            return Return.ok(_generic_response())

    async def _execute(self, email: str) -> Result[RequestPasswordResetResponse]:
        async with self.uow:
            account = await CredentialStore(self.uow).find_account(email)

            if account is None:
                logger.info(f"Password reset requested for unknown email {preview(email)}")
                return Return.ok(_generic_response())

            if not account.is_active:
                log_security_event(
                    "PASSWORD_RESET_DEACTIVATED", "medium",
                    subject_type=account.subject_type.value, subject_id=account.subject_id,
                )
                return Return.err(deactivated_account())

            encrypted_token = self.cipher.encrypt(
                generate_random_string(self.settings.reset_token_length)
            )
            await self.uow.password_resets.replace_for_email(
                PasswordResetRequest(email=account.email, token=encrypted_token)
            )
            await self.uow.commit()

        link = build_reset_link(self.settings.frontend_url, encrypted_token)
        try:
            await self.email_sender.send(
                reset_password_email(account.email, link, self.settings.password_reset_ttl_minutes)
            )
        except Exception:
            logger.exception(f"Reset email dispatch failed for {preview(account.email)}")

        logger.info(f"Password reset issued for {account.subject_type.value} {account.subject_id}")
        return Return.ok(_generic_response())
