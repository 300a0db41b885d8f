"""
Credential Store

Resolves subjects by login identifier, verifies passwords and writes new
password hashes for both subject kinds.
"""

import logging
from functools import lru_cache
from typing import Optional
from uuid import UUID

import bcrypt
from pydantic import BaseModel

from hrms_auth.app.services.security_log import log_security_event, preview
from hrms_auth.app.services.unit_of_work import UnitOfWork
from hrms_auth.domain.base import utcnow
from hrms_auth.domain.entities import (
    CUSTOMER_ROLE,
    AccountStatus,
    EmployeeRole,
    SubjectType,
)
from hrms_auth.result import Error, Result, Return

logger = logging.getLogger(__name__)

# bcrypt ignores (4.x) or rejects (5.x) input past this length
MAX_PASSWORD_BYTES = 72


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return bcrypt.hashpw(b"timing-equalizer", bcrypt.gensalt(10)).decode("utf-8")


class SubjectAccount(BaseModel):
    """Resolved subject plus its credential; never leaves the application layer"""

    subject_type: SubjectType
    subject_id: UUID
    email: str
    role: str
    status: AccountStatus
    password_hash: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.status == AccountStatus.active


class VerifiedSubject(BaseModel):
    """Subject identity after a successful password check"""

    subject_type: SubjectType
    subject_id: UUID
    role: str
    email: str


def hash_password(password: str, rounds: int = 10) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds)).decode("utf-8")


def compare_password(candidate: str, password_hash: Optional[str]) -> bool:
    """Constant-time bcrypt comparison; malformed input is a mismatch, never an exception"""
    if not candidate or not password_hash or not password_hash.startswith("$2"):
        return False
    try:
        return bcrypt.checkpw(candidate.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


class CredentialStore:
    """
    Password verification and update for employees and customers.

    Business Rules:
    - Employee lookup is tried before customer lookup; first match wins
    - "No such subject", "inactive" and "wrong password" all return the same error
    - A dummy bcrypt check runs when no credential exists, keeping timing uniform
    - Candidate passwords and stored hashes are never logged
    """

    INVALID = Error("INVALID_CREDENTIALS", "Incorrect email or password.")

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def find_account(self, identifier: str) -> Optional[SubjectAccount]:
        """Resolve an identifier against employees, then customers"""
        employee = await self.find_account_by_type(SubjectType.employee, identifier)
        if employee is not None:
            if await self.uow.customers.get_by_email(identifier) is not None:
                logger.warning(
                    f"Identifier {preview(identifier)} matches both an employee and a customer; "
                    "using employee"
                )
            return employee
        return await self.find_account_by_type(SubjectType.customer, identifier)

    async def find_account_by_type(
        self, subject_type: SubjectType, identifier: str
    ) -> Optional[SubjectAccount]:
        if subject_type == SubjectType.employee:
            employee = await self.uow.employees.get_by_official_email(identifier)
            if employee is None:
                return None
            user = await self.uow.users.get_by_employee_id(employee.id)
            if user is None:
                return SubjectAccount(
                    subject_type=SubjectType.employee,
                    subject_id=employee.id,
                    email=employee.official_email_id,
                    role=EmployeeRole.employee.value,
                    status=AccountStatus.inactive,
                )
            return SubjectAccount(
                subject_type=SubjectType.employee,
                subject_id=employee.id,
                email=employee.official_email_id,
                role=user.role,
                status=user.status,
                password_hash=user.password_hash,
            )

        customer = await self.uow.customers.get_by_email(identifier)
        if customer is None:
            return None
        access = await self.uow.customer_access.get_by_customer_id(customer.id)
        return SubjectAccount(
            subject_type=SubjectType.customer,
            subject_id=customer.id,
            email=customer.email,
            role=CUSTOMER_ROLE,
            status=access.status if access else AccountStatus.inactive,
            password_hash=access.password_hash if access else None,
        )

    def verify_account(
        self, account: Optional[SubjectAccount], candidate_password: str
    ) -> Result[VerifiedSubject]:
        if account is None or not account.is_active or not account.password_hash:
            compare_password(candidate_password or "-", _dummy_hash())
            return Return.err(self.INVALID)

        if not compare_password(candidate_password, account.password_hash):
            return Return.err(self.INVALID)

        return Return.ok(
            VerifiedSubject(
                subject_type=account.subject_type,
                subject_id=account.subject_id,
                role=account.role,
                email=account.email,
            )
        )

    async def verify(
        self, subject_type: SubjectType, identifier: str, candidate_password: str
    ) -> Result[VerifiedSubject]:
        """Verify a password for a known subject kind"""
        account = await self.find_account_by_type(subject_type, identifier)
        return self.verify_account(account, candidate_password)

    async def get_role(self, subject_type: SubjectType, subject_id: UUID) -> str:
        if subject_type == SubjectType.customer:
            return CUSTOMER_ROLE
        user = await self.uow.users.get_by_employee_id(subject_id)
        return user.role if user else EmployeeRole.employee.value

    async def set_password(
        self, subject_type: SubjectType, subject_id: UUID, new_hash: str
    ) -> int:
        """Write a new bcrypt hash. Returns affected row count."""
        if subject_type == SubjectType.employee:
            rows = await self.uow.users.update_password(subject_id, new_hash)
        else:
            rows = await self.uow.customer_access.update_password(subject_id, new_hash)
        if rows == 0:
            log_security_event(
                "PASSWORD_UPDATE_NO_ROWS", "high",
                subject_type=subject_type.value, subject_id=subject_id,
            )
        return rows

    async def touch_last_login(self, subject_type: SubjectType, subject_id: UUID) -> int:
        if subject_type == SubjectType.employee:
            return await self.uow.users.update_last_login(subject_id, utcnow())
        return await self.uow.customer_access.update_last_login(subject_id, utcnow())
