from abc import ABC, abstractmethod

from hrms_auth.app.repositories.customer_access_repository import ICustomerAccessRepository
from hrms_auth.app.repositories.customer_repository import ICustomerRepository
from hrms_auth.app.repositories.employee_repository import IEmployeeRepository
from hrms_auth.app.repositories.online_status_repository import IOnlineStatusRepository
from hrms_auth.app.repositories.password_reset_request_repository import (
    IPasswordResetRequestRepository,
)
from hrms_auth.app.repositories.session_repository import ISessionRepository
from hrms_auth.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    employees: IEmployeeRepository
    users: IUserRepository
    customers: ICustomerRepository
    customer_access: ICustomerAccessRepository
    online_status: IOnlineStatusRepository
    sessions: ISessionRepository
    password_resets: IPasswordResetRequestRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
