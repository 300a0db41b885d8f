"""
Validate Reset Link Use Case

Checks that a reset token exists and is inside its validity window.
"""

import logging
from datetime import timedelta
from typing import Optional

from hrms_auth.app.services.security_log import log_security_event, preview
from hrms_auth.app.services.unit_of_work import UnitOfWork
from hrms_auth.domain.base import utcnow
from hrms_auth.domain.entities import PasswordResetRequest
from hrms_auth.result import Result, Return
from .dtos import ValidateResetLinkResponse
from .errors import reset_token_invalid

logger = logging.getLogger(__name__)


async def find_valid_reset_request(
    uow: UnitOfWork, token: Optional[str], ttl: timedelta
) -> Optional[PasswordResetRequest]:
    """Pending request for token, or None if absent or older than ttl"""
    if not token:
        return None

    request = await uow.password_resets.get_by_token(token)
    if request is None:
        log_security_event("RESET_TOKEN_UNKNOWN", "low", token=preview(token))
        return None

    if request.is_expired(utcnow(), ttl):
        log_security_event("RESET_TOKEN_EXPIRED", "low", request_id=request.id)
        return None

    return request


class ValidateResetLinkUseCase:
    """
    Use case for validating a reset link.

    Business Rules:
    - Expired tokens are indistinguishable from unknown ones
    - Validation does not consume the token
    """

    def __init__(self, uow: UnitOfWork, ttl: timedelta):
        self.uow = uow
        self.ttl = ttl

    async def execute(self, token: str) -> Result[ValidateResetLinkResponse]:
        async with self.uow:
            request = await find_valid_reset_request(self.uow, token, self.ttl)
            if request is None:
                return Return.err(reset_token_invalid())

            return Return.ok(ValidateResetLinkResponse(valid=True, email=request.email))
