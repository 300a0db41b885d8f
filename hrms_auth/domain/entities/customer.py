"""
Customer Entity

Directory record for external customers.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from ..base import utcnow


class Customer(SQLModel, table=True):
    """Customer entity - login identity is the email."""

    __tablename__ = "customers"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    email: str = Field(unique=True, index=True, max_length=255)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
