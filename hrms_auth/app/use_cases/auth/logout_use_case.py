"""
Logout Use Case

Revokes the session behind a refresh secret. Always succeeds.
"""

import logging
from typing import Optional

from hrms_auth.app.services.credential_store import CredentialStore
from hrms_auth.app.services.security_log import preview
from hrms_auth.app.services.token_issuer import TokenIssuer
from hrms_auth.app.services.unit_of_work import UnitOfWork
from hrms_auth.domain.entities import OnlineStatusValue, SubjectType
from hrms_auth.result import Result, Return
from .dtos import LogoutResponse

logger = logging.getLogger(__name__)


class LogoutUseCase:
    """
    Use case for logout.

    Business Rules:
    - Revocation is best-effort; the caller is always told to clear the cookie
    - Revoking an unknown or already revoked session is not an error
    - Employees go OFFLINE; customers get their last-activity stamp updated
    """

    def __init__(self, uow: UnitOfWork, token_issuer: TokenIssuer):
        self.uow = uow
        self.token_issuer = token_issuer

    async def execute(self, refresh_token: Optional[str]) -> Result[LogoutResponse]:
        if refresh_token:
            try:
                await self._revoke(refresh_token)
            except Exception:
                logger.exception("Logout revocation failed; clearing cookie anyway")
        return Return.ok(LogoutResponse(cleared=True))

    async def _revoke(self, refresh_token: str) -> None:
        async with self.uow:
            token_hash = self.token_issuer.hash(refresh_token)
            session = await self.uow.sessions.find_by_token_hash(token_hash)

            if session is None or session.is_revoked:
                logger.info(f"Logout with no active session token_hash={preview(token_hash)}")
                return

            rows = await self.uow.sessions.revoke(token_hash)
            await self.uow.commit()
            if rows == 0:
                return

            if session.subject_type == SubjectType.employee:
                await self.uow.online_status.upsert(session.subject_id, OnlineStatusValue.offline)
            else:
                await CredentialStore(self.uow).touch_last_login(
                    session.subject_type, session.subject_id
                )
            await self.uow.commit()

            logger.info(f"Session {session.id} revoked for {session.subject_type.value}")
