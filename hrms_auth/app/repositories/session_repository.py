from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from hrms_auth.domain.entities import Session


class ISessionRepository(ABC):
    """Session repository interface - application layer"""

    @abstractmethod
    async def create(self, session: Session) -> Session:
        """Persist a new session"""
        pass

    @abstractmethod
    async def find_by_token_hash(self, token_hash: str) -> Optional[Session]:
        """Find session by refresh token digest, including revoked and expired rows"""
        pass

    @abstractmethod
    async def rotate(self, old_hash: str, new_hash: str, new_expires_at: datetime) -> int:
        """
        Replace the token digest and expiry of the session keyed by old_hash.

        Single conditional UPDATE; returns 0 when another rotation or a
        revocation got there first.
        """
        pass

    @abstractmethod
    async def revoke(self, token_hash: str) -> int:
        """Revoke the session keyed by token_hash. Returns 0 if already revoked or absent."""
        pass

    @abstractmethod
    async def get_expired_subject_ids(self, subject_type: str, now: datetime) -> List[UUID]:
        """Distinct subjects with an unrevoked session past expires_at"""
        pass

    @abstractmethod
    async def get_active_subject_ids(
        self, subject_type: str, subject_ids: List[UUID], now: datetime
    ) -> List[UUID]:
        """Subset of subject_ids that still hold an unrevoked, unexpired session"""
        pass

    @abstractmethod
    async def delete_revoked_before(self, cutoff: datetime) -> int:
        """Delete sessions revoked before cutoff. Returns count deleted."""
        pass
