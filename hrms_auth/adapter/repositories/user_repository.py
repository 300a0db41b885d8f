from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from hrms_auth.app.repositories.user_repository import IUserRepository
from hrms_auth.domain.entities import User


class UserRepository(IUserRepository):
    """Employee credential repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_employee_id(self, employee_id: UUID) -> Optional[User]:
        stmt = select(User).where(User.employee_id == employee_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update_last_login(self, employee_id: UUID, at: datetime) -> int:
        stmt = update(User).where(User.employee_id == employee_id).values(last_login_at=at)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def update_password(self, employee_id: UUID, password_hash: str) -> int:
        stmt = (
            update(User)
            .where(User.employee_id == employee_id)
            .values(password_hash=password_hash)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
