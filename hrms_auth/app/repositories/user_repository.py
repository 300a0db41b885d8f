from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from hrms_auth.domain.entities import User


class IUserRepository(ABC):
    """Employee credential repository interface - application layer"""

    @abstractmethod
    async def get_by_employee_id(self, employee_id: UUID) -> Optional[User]:
        """Get the credential row for an employee"""
        pass

    @abstractmethod
    async def update_last_login(self, employee_id: UUID, at: datetime) -> int:
        """Stamp last_login_at. Returns affected row count."""
        pass

    @abstractmethod
    async def update_password(self, employee_id: UUID, password_hash: str) -> int:
        """Replace the password hash. Returns affected row count."""
        pass
