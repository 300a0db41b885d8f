"""
Employee Entity

Directory record for staff. Login identity is the official email.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from ..base import utcnow

SENSITIVE_FIELDS = (
    "pan_card_number",
    "bank_account_number",
    "aadhaar_card_number",
    "pf_account_number",
)


class Employee(SQLModel, table=True):
    """
    Employee entity - directory record for staff.

    Business Rules:
    - official_email_id is the login identifier and is unique
    - PII columns hold field-cipher output (iv:ciphertext) or legacy plain text
    """

    __tablename__ = "employees"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    official_email_id: str = Field(unique=True, index=True, max_length=255)

    pan_card_number: Optional[str] = Field(default=None, max_length=512)
    bank_account_number: Optional[str] = Field(default=None, max_length=512)
    aadhaar_card_number: Optional[str] = Field(default=None, max_length=512)
    pf_account_number: Optional[str] = Field(default=None, max_length=512)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
