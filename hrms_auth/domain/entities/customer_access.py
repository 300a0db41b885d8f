"""
CustomerAccess Entity

Login credential belonging to a customer.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from ..base import utcnow
from .enums import AccountStatus


class CustomerAccess(SQLModel, table=True):
    """
    CustomerAccess entity - the credential row for a customer.

    Business Rules:
    - One credential per customer
    - Password stored as bcrypt hash
    - last_login_at doubles as the last-activity stamp on logout
    """

    __tablename__ = "customer_access"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    customer_id: UUID = Field(foreign_key="customers.id", unique=True, index=True)

    password_hash: str = Field(max_length=60)
    status: AccountStatus = Field(default=AccountStatus.active)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
