"""
PasswordResetRequest Entity

Single-use, time-boxed password reset tokens.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow


class PasswordResetRequest(SQLModel, table=True):
    """
    PasswordResetRequest entity - one pending reset per email.

    Business Rules:
    - token holds the field-cipher output; the same value travels in the link
    - A new request for an email deletes the prior ones
    - Valid for a fixed window (default 15 minutes) from created_at
    - Deleted on successful consumption (single-use)
    """

    __tablename__ = "password_reset_requests"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    email: str = Field(max_length=255)
    token: str = Field(max_length=512, unique=True)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_password_reset_email", "email"),)

    def is_expired(self, now: datetime, ttl) -> bool:
        return now - self.created_at > ttl
