"""
Load Profile Use Case

Resolves the subject behind a verified access token.
"""

from typing import Dict, Optional
from uuid import UUID

from pydantic import BaseModel

from hrms_auth.app.services.field_cipher import FieldCipher, decrypt_sensitive_fields
from hrms_auth.app.services.unit_of_work import UnitOfWork
from hrms_auth.domain.entities import SENSITIVE_FIELDS, SubjectType
from hrms_auth.result import Error, Result, Return


class ProfileResponse(BaseModel):
    """GET /me response payload"""

    id: str
    type: str
    role: str
    name: str
    email: str
    sensitive: Optional[Dict[str, Optional[str]]] = None


class LoadProfileUseCase:
    """
    Use case for loading the current subject.

    Business Rules:
    - Identity comes only from the access token claims
    - Employee PII is decrypted on the way out; legacy plain text passes through
    """

    def __init__(self, uow: UnitOfWork, cipher: FieldCipher):
        self.uow = uow
        self.cipher = cipher

    async def execute(
        self, subject_id: UUID, subject_type: SubjectType, role: str
    ) -> Result[ProfileResponse]:
        async with self.uow:
            if subject_type == SubjectType.employee:
                employee = await self.uow.employees.get_by_id(subject_id)
                if employee is None:
                    return Return.err(Error("SUBJECT_NOT_FOUND", "Account not found"))

                raw = {field: getattr(employee, field) for field in SENSITIVE_FIELDS}
                return Return.ok(
                    ProfileResponse(
                        id=str(employee.id),
                        type=subject_type.value,
                        role=role,
                        name=employee.name,
                        email=employee.official_email_id,
                        sensitive=decrypt_sensitive_fields(self.cipher, raw),
                    )
                )

            customer = await self.uow.customers.get_by_id(subject_id)
            if customer is None:
                return Return.err(Error("SUBJECT_NOT_FOUND", "Account not found"))

            return Return.ok(
                ProfileResponse(
                    id=str(customer.id),
                    type=subject_type.value,
                    role=role,
                    name=customer.name,
                    email=customer.email,
                )
            )
