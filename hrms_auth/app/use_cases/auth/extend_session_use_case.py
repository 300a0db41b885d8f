"""
Extend Session Use Case

Exchanges a refresh secret for a new access token and rotates the secret.
"""

import logging
from datetime import timedelta
from typing import Optional

from hrms_auth.app.services.credential_store import CredentialStore
from hrms_auth.app.services.security_log import log_security_event, preview
from hrms_auth.app.services.token_issuer import TokenIssuer
from hrms_auth.app.services.unit_of_work import UnitOfWork
from hrms_auth.domain.base import utcnow
from hrms_auth.result import Result, Return
from .dtos import AccessTokenResponse, IssuedSession, SubjectInfo
from .errors import session_not_found

logger = logging.getLogger(__name__)


class ExtendSessionUseCase:
    """
    Use case for refresh token rotation.

    Business Rules:
    - Missing, revoked, expired and already-rotated sessions are one outcome
    - Rotation is a compare-and-swap on the old digest; losing it forces re-login
    - The session row is updated in place, never duplicated
    - Employee role is re-read from the credential row on every extend
    """

    def __init__(self, uow: UnitOfWork, token_issuer: TokenIssuer, session_ttl: timedelta):
        self.uow = uow
        self.token_issuer = token_issuer
        self.session_ttl = session_ttl

    async def execute(self, refresh_token: Optional[str]) -> Result[IssuedSession]:
        """
        Execute extend session use case.

        Args:
            refresh_token: Raw refresh secret from the cookie

        Returns:
            Result with IssuedSession carrying the next refresh secret, or SESSION_NOT_FOUND
        """
        if not refresh_token:
            return Return.err(session_not_found())

        async with self.uow:
            token_hash = self.token_issuer.hash(refresh_token)
            session = await self.uow.sessions.find_by_token_hash(token_hash)

            now = utcnow()
            reason = None
            if session is None:
                reason = "unknown_token"
            elif session.is_revoked:
                reason = "revoked"
            elif session.is_expired(now):
                reason = "expired"

            if reason is not None:
                log_security_event(
                    "SESSION_EXTEND_REJECTED", "medium",
                    reason=reason, token_hash=preview(token_hash),
                )
                return Return.err(session_not_found())

            role = await CredentialStore(self.uow).get_role(
                session.subject_type, session.subject_id
            )

            new_refresh_token = self.token_issuer.issue_refresh_secret()
            rows = await self.uow.sessions.rotate(
                token_hash,
                self.token_issuer.hash(new_refresh_token),
                now + self.session_ttl,
            )

            if rows == 0:
                # Another request rotated or revoked this session first
                log_security_event(
                    "SESSION_ROTATION_CONFLICT", "high",
                    session_id=session.id, token_hash=preview(token_hash),
                )
                await self.uow.rollback()
                return Return.err(session_not_found())

            await self.uow.commit()

            access_token = self.token_issuer.issue_access_token(
                session.subject_id, role, session.subject_type
            )

            logger.info(f"Session {session.id} rotated for {session.subject_type.value}")

            return Return.ok(
                IssuedSession(
                    response=AccessTokenResponse(
                        token=access_token,
                        expires_in=self.token_issuer.access_token_expires_in,
                        subject=SubjectInfo(
                            id=str(session.subject_id),
                            type=session.subject_type.value,
                            role=role,
                        ),
                    ),
                    refresh_token=new_refresh_token,
                    refresh_max_age=int(self.session_ttl.total_seconds()),
                )
            )
