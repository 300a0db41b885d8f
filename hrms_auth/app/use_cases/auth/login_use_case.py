"""
Login Use Case

Authenticates an employee or customer and opens a refresh-token session.
"""

import logging
from datetime import timedelta
from typing import Optional

from hrms_auth.app.services.credential_store import CredentialStore, VerifiedSubject
from hrms_auth.app.services.security_log import log_security_event, preview
from hrms_auth.app.services.token_issuer import TokenIssuer
from hrms_auth.app.services.unit_of_work import UnitOfWork
from hrms_auth.domain.base import utcnow
from hrms_auth.domain.entities import OnlineStatusValue, Session, SubjectType
from hrms_auth.result import Result, Return
from .dtos import AccessTokenResponse, IssuedSession, SubjectInfo

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for subject login and token issuance.

    Business Rules:
    - Subject resolved by employee lookup first, then customer lookup
    - Unknown identifier, inactive account and wrong password share one error
    - New session stores only the SHA-256 digest of the refresh secret
    - Last-login and online-status updates are best-effort, after the session commit
    """

    def __init__(self, uow: UnitOfWork, token_issuer: TokenIssuer, session_ttl: timedelta):
        self.uow = uow
        self.token_issuer = token_issuer
        self.session_ttl = session_ttl

    async def execute(
        self,
        email: str,
        password: str,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> Result[IssuedSession]:
        """
        Execute login use case.

        Args:
            email: Official email (employee) or email (customer)
            password: Plain text password
            user_agent: Client user agent, stored on the session
            ip_address: Client IP, stored on the session

        Returns:
            Result with IssuedSession (access token response + raw refresh secret), or Error
        """
        async with self.uow:
            credentials = CredentialStore(self.uow)
            account = await credentials.find_account(email)
            verified = credentials.verify_account(account, password)

            if verified.is_err():
                if account is None:
                    reason = "unknown_identifier"
                elif not account.is_active:
                    reason = "inactive_account"
                else:
                    reason = "bad_password"
                log_security_event(
                    "LOGIN_FAILED", "medium",
                    identifier=preview(email), reason=reason, ip_address=ip_address,
                )
                return Return.err(verified.error)

            subject = verified.value

            # Refresh secret leaves this process only through the cookie
            refresh_token = self.token_issuer.issue_refresh_secret()
            session = Session(
                subject_id=subject.subject_id,
                subject_type=subject.subject_type,
                token_hash=self.token_issuer.hash(refresh_token),
                user_agent=user_agent,
                ip_address=ip_address,
                expires_at=utcnow() + self.session_ttl,
            )
            await self.uow.sessions.create(session)
            await self.uow.commit()
            session_id = session.id

            await self._record_login(credentials, subject)

            access_token = self.token_issuer.issue_access_token(
                subject.subject_id, subject.role, subject.subject_type, subject.email
            )

            logger.info(
                f"Login succeeded for {subject.subject_type.value} {subject.subject_id} "
                f"session={session_id}"
            )

            return Return.ok(
                IssuedSession(
                    response=AccessTokenResponse(
                        token=access_token,
                        expires_in=self.token_issuer.access_token_expires_in,
                        subject=SubjectInfo(
                            id=str(subject.subject_id),
                            type=subject.subject_type.value,
                            role=subject.role,
                            email=subject.email,
                        ),
                    ),
                    refresh_token=refresh_token,
                    refresh_max_age=int(self.session_ttl.total_seconds()),
                )
            )

    async def _record_login(self, credentials: CredentialStore, subject: VerifiedSubject):
        try:
            await credentials.touch_last_login(subject.subject_type, subject.subject_id)
            if subject.subject_type == SubjectType.employee:
                await self.uow.online_status.upsert(subject.subject_id, OnlineStatusValue.online)
            await self.uow.commit()
        except Exception:
            logger.exception(
                f"Login side effects failed for {subject.subject_type.value} {subject.subject_id}"
            )
            await self.uow.rollback()
