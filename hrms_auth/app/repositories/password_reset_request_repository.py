from abc import ABC, abstractmethod
from typing import Optional

from hrms_auth.domain.entities import PasswordResetRequest


class IPasswordResetRequestRepository(ABC):
    """Password reset request repository interface - application layer"""

    @abstractmethod
    async def replace_for_email(self, request: PasswordResetRequest) -> PasswordResetRequest:
        """Delete any pending request for the email, then insert this one"""
        pass

    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[PasswordResetRequest]:
        """Find request by its encrypted token"""
        pass

    @abstractmethod
    async def delete_by_email(self, email: str) -> int:
        """Delete all requests for an email. Returns count deleted."""
        pass
