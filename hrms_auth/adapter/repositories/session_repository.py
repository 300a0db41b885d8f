from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from hrms_auth.app.repositories.session_repository import ISessionRepository
from hrms_auth.domain.base import utcnow
from hrms_auth.domain.entities import Session


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, session_obj: Session) -> Session:
        """Create a new session"""
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    async def find_by_token_hash(self, token_hash: str) -> Optional[Session]:
        """
        Find session by refresh token digest.

        Revoked and expired rows are returned too; validity is checked by the
        caller so the store stays a plain persistence layer.
        """
        stmt = (
            select(Session)
            .where(Session.token_hash == token_hash)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def rotate(self, old_hash: str, new_hash: str, new_expires_at: datetime) -> int:
        """
        Compare-and-swap the token digest.

        The WHERE clause is the guard: of two rotations racing on the same
        predecessor only one can match old_hash.
        """
        stmt = (
            update(Session)
            .where(Session.token_hash == old_hash, Session.revoked_at.is_(None))
            .values(token_hash=new_hash, expires_at=new_expires_at)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def revoke(self, token_hash: str) -> int:
        """Revoke a session; revoking twice affects 0 rows"""
        stmt = (
            update(Session)
            .where(Session.token_hash == token_hash, Session.revoked_at.is_(None))
            .values(revoked_at=utcnow())
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def get_expired_subject_ids(self, subject_type: str, now: datetime) -> List[UUID]:
        stmt = (
            select(Session.subject_id)
            .where(
                Session.subject_type == subject_type,
                Session.expires_at < now,
                Session.revoked_at.is_(None),
            )
            .distinct()
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_active_subject_ids(
        self, subject_type: str, subject_ids: List[UUID], now: datetime
    ) -> List[UUID]:
        if not subject_ids:
            return []
        stmt = (
            select(Session.subject_id)
            .where(
                Session.subject_type == subject_type,
                Session.subject_id.in_(subject_ids),
                Session.expires_at >= now,
                Session.revoked_at.is_(None),
            )
            .distinct()
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def delete_revoked_before(self, cutoff: datetime) -> int:
        stmt = delete(Session).where(
            Session.revoked_at.is_not(None), Session.revoked_at < cutoff
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
