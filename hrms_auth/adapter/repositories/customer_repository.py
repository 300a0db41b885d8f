from typing import Optional
from uuid import UUID

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from hrms_auth.app.repositories.customer_repository import ICustomerRepository
from hrms_auth.domain.entities import Customer


class CustomerRepository(ICustomerRepository):
    """Customer repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, customer_id: UUID) -> Optional[Customer]:
        stmt = select(Customer).where(Customer.id == customer_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[Customer]:
        stmt = select(Customer).where(func.lower(Customer.email) == email.strip().lower())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
