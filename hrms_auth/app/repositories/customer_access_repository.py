from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from hrms_auth.domain.entities import CustomerAccess


class ICustomerAccessRepository(ABC):
    """Customer credential repository interface - application layer"""

    @abstractmethod
    async def get_by_customer_id(self, customer_id: UUID) -> Optional[CustomerAccess]:
        """Get the credential row for a customer"""
        pass

    @abstractmethod
    async def update_last_login(self, customer_id: UUID, at: datetime) -> int:
        """Stamp last_login_at. Returns affected row count."""
        pass

    @abstractmethod
    async def update_password(self, customer_id: UUID, password_hash: str) -> int:
        """Replace the password hash. Returns affected row count."""
        pass
