"""
Cleanup Sessions Use Case

Housekeeping for the sessions table. Nothing in the login/extend/logout path
depends on it; expiry is always enforced at read time.
"""

import logging
from datetime import timedelta

from pydantic import BaseModel

from hrms_auth.app.services.unit_of_work import UnitOfWork
from hrms_auth.domain.base import utcnow
from hrms_auth.domain.entities import SubjectType
from hrms_auth.result import Result, Return

logger = logging.getLogger(__name__)


class CleanupSessionsResponse(BaseModel):
    employees_marked_offline: int
    revoked_sessions_deleted: int


class CleanupSessionsUseCase:
    """
    Use case for periodic session cleanup.

    Business Rules:
    - Employees whose sessions have all lapsed are marked OFFLINE
    - An employee holding any live session keeps its status
    - Revoked sessions older than the retention window are deleted
    """

    def __init__(self, uow: UnitOfWork, revoked_retention: timedelta):
        self.uow = uow
        self.revoked_retention = revoked_retention

    async def execute(self) -> Result[CleanupSessionsResponse]:
        async with self.uow:
            now = utcnow()

            expired = await self.uow.sessions.get_expired_subject_ids(SubjectType.employee, now)
            active = set(
                await self.uow.sessions.get_active_subject_ids(SubjectType.employee, expired, now)
            )
            to_mark = [subject_id for subject_id in expired if subject_id not in active]
            marked = await self.uow.online_status.mark_offline(to_mark)

            deleted = await self.uow.sessions.delete_revoked_before(now - self.revoked_retention)

            await self.uow.commit()

            logger.info(
                f"Session cleanup: {len(expired)} employees with expired sessions, "
                f"{marked} marked offline, {deleted} revoked sessions deleted"
            )

            return Return.ok(
                CleanupSessionsResponse(
                    employees_marked_offline=marked,
                    revoked_sessions_deleted=deleted,
                )
            )
