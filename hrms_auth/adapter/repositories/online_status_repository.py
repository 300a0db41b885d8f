from typing import List
from uuid import UUID

from sqlalchemy import update
from sqlmodel.ext.asyncio.session import AsyncSession

from hrms_auth.app.repositories.online_status_repository import IOnlineStatusRepository
from hrms_auth.domain.base import utcnow
from hrms_auth.domain.entities import OnlineStatus, OnlineStatusValue


class OnlineStatusRepository(IOnlineStatusRepository):
    """Employee presence repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def upsert(self, employee_id: UUID, status: OnlineStatusValue) -> OnlineStatus:
        row = await self.session.get(OnlineStatus, employee_id)
        if row is None:
            row = OnlineStatus(employee_id=employee_id)
        row.status = status
        row.updated_at = utcnow()
        self.session.add(row)
        await self.session.flush()
        return row

    async def mark_offline(self, employee_ids: List[UUID]) -> int:
        if not employee_ids:
            return 0
        stmt = (
            update(OnlineStatus)
            .where(
                OnlineStatus.employee_id.in_(employee_ids),
                OnlineStatus.status != OnlineStatusValue.offline,
            )
            .values(status=OnlineStatusValue.offline, updated_at=utcnow())
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
