"""
OnlineStatus Entity

Presence flag for employees, flipped by login/logout and session cleanup.
"""

from datetime import datetime
from uuid import UUID

from sqlmodel import Column, DateTime, Field, SQLModel

from ..base import utcnow
from .enums import OnlineStatusValue


class OnlineStatus(SQLModel, table=True):
    __tablename__ = "employee_online_status"

    employee_id: UUID = Field(foreign_key="employees.id", primary_key=True)
    status: OnlineStatusValue = Field(default=OnlineStatusValue.offline)
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
