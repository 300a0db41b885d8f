from typing import Optional

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from hrms_auth.app.repositories.password_reset_request_repository import (
    IPasswordResetRequestRepository,
)
from hrms_auth.domain.entities import PasswordResetRequest


class PasswordResetRequestRepository(IPasswordResetRequestRepository):
    """Password reset request repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def replace_for_email(self, request: PasswordResetRequest) -> PasswordResetRequest:
        """Supersede any pending request for the same email"""
        await self.session.execute(
            delete(PasswordResetRequest).where(PasswordResetRequest.email == request.email)
        )
        self.session.add(request)
        await self.session.flush()
        await self.session.refresh(request)
        return request

    async def get_by_token(self, token: str) -> Optional[PasswordResetRequest]:
        stmt = select(PasswordResetRequest).where(PasswordResetRequest.token == token)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_by_email(self, email: str) -> int:
        result = await self.session.execute(
            delete(PasswordResetRequest).where(PasswordResetRequest.email == email)
        )
        await self.session.flush()
        return result.rowcount
