from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from hrms_auth.domain.entities import OnlineStatus, OnlineStatusValue


class IOnlineStatusRepository(ABC):
    """Employee presence repository interface - application layer"""

    @abstractmethod
    async def upsert(self, employee_id: UUID, status: OnlineStatusValue) -> OnlineStatus:
        """Create or update the presence row for an employee"""
        pass

    @abstractmethod
    async def mark_offline(self, employee_ids: List[UUID]) -> int:
        """Flip the given employees to OFFLINE. Returns count actually changed."""
        pass
