from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from hrms_auth.domain.entities import Customer


class ICustomerRepository(ABC):
    """Customer directory lookups - application layer"""

    @abstractmethod
    async def get_by_id(self, customer_id: UUID) -> Optional[Customer]:
        """Get customer by ID"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[Customer]:
        """Get customer by email (case-insensitive)"""
        pass
