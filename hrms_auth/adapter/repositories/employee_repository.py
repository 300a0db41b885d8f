from typing import Optional
from uuid import UUID

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from hrms_auth.app.repositories.employee_repository import IEmployeeRepository
from hrms_auth.domain.entities import Employee


class EmployeeRepository(IEmployeeRepository):
    """Employee repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, employee_id: UUID) -> Optional[Employee]:
        stmt = select(Employee).where(Employee.id == employee_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_official_email(self, email: str) -> Optional[Employee]:
        stmt = select(Employee).where(
            func.lower(Employee.official_email_id) == email.strip().lower()
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
