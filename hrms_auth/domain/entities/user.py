"""
User Entity

Login credential belonging to an employee.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import AccountStatus, EmployeeRole


class User(SQLModel, table=True):
    """
    User entity - the credential row for an employee.

    Business Rules:
    - One credential per employee
    - Password stored as bcrypt hash
    - status gates login and password reset
    - role is copied into every access token
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    employee_id: UUID = Field(foreign_key="employees.id", unique=True, index=True)

    password_hash: str = Field(max_length=60)
    role: str = Field(default=EmployeeRole.employee.value, max_length=50)
    status: AccountStatus = Field(default=AccountStatus.active)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_status", "status"),)
