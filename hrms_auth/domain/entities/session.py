"""
Session Entity

One row per active refresh token.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import SubjectType


class Session(SQLModel, table=True):
    """
    Session entity - persists the digest of a refresh secret.

    Business Rules:
    - Only the SHA-256 digest of the refresh secret is stored
    - token_hash is unique; exactly one row resolves a valid secret
    - Rotation replaces token_hash and expires_at in place (same row)
    - Revocation is terminal: revoked_at is never cleared
    - Expiry is checked when the session is used, not swept
    """

    __tablename__ = "sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    subject_id: UUID = Field(nullable=False, index=True)
    subject_type: SubjectType = Field(nullable=False)

    token_hash: str = Field(max_length=64, unique=True, index=True)
    user_agent: Optional[str] = Field(default=None, max_length=512)
    ip_address: Optional[str] = Field(default=None, max_length=64)

    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    revoked_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_session_expires_at", "expires_at"),
        Index("idx_session_subject", "subject_type", "subject_id"),
        Index("idx_session_revoked_at", "revoked_at"),
    )

    @property
    def is_revoked(self) -> bool:
        return self.revoked_at is not None

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now
