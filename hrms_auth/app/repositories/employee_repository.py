from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from hrms_auth.domain.entities import Employee


class IEmployeeRepository(ABC):
    """Employee directory lookups - application layer"""

    @abstractmethod
    async def get_by_id(self, employee_id: UUID) -> Optional[Employee]:
        """Get employee by ID"""
        pass

    @abstractmethod
    async def get_by_official_email(self, email: str) -> Optional[Employee]:
        """Get employee by official email (case-insensitive)"""
        pass
