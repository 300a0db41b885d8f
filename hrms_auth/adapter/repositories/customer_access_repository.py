from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from hrms_auth.app.repositories.customer_access_repository import ICustomerAccessRepository
from hrms_auth.domain.entities import CustomerAccess


class CustomerAccessRepository(ICustomerAccessRepository):
    """Customer credential repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_customer_id(self, customer_id: UUID) -> Optional[CustomerAccess]:
        stmt = select(CustomerAccess).where(CustomerAccess.customer_id == customer_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update_last_login(self, customer_id: UUID, at: datetime) -> int:
        stmt = (
            update(CustomerAccess)
            .where(CustomerAccess.customer_id == customer_id)
            .values(last_login_at=at)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def update_password(self, customer_id: UUID, password_hash: str) -> int:
        stmt = (
            update(CustomerAccess)
            .where(CustomerAccess.customer_id == customer_id)
            .values(password_hash=password_hash)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
