from sqlmodel.ext.asyncio.session import AsyncSession

from hrms_auth.adapter.repositories.customer_access_repository import CustomerAccessRepository
from hrms_auth.adapter.repositories.customer_repository import CustomerRepository
from hrms_auth.adapter.repositories.employee_repository import EmployeeRepository
from hrms_auth.adapter.repositories.online_status_repository import OnlineStatusRepository
from hrms_auth.adapter.repositories.password_reset_request_repository import (
    PasswordResetRequestRepository,
)
from hrms_auth.adapter.repositories.session_repository import SessionRepository
from hrms_auth.adapter.repositories.user_repository import UserRepository
from hrms_auth.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.employees = EmployeeRepository(self.session)
        self.users = UserRepository(self.session)
        self.customers = CustomerRepository(self.session)
        self.customer_access = CustomerAccessRepository(self.session)
        self.online_status = OnlineStatusRepository(self.session)
        self.sessions = SessionRepository(self.session)
        self.password_resets = PasswordResetRequestRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
