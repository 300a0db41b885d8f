"""
Auth Service Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    CUSTOMER_ROLE,
    AccountStatus,
    EmployeeRole,
    OnlineStatusValue,
    SubjectType,
)

# Export all entities
from .employee import SENSITIVE_FIELDS, Employee
from .user import User
from .customer import Customer
from .customer_access import CustomerAccess
from .online_status import OnlineStatus
from .session import Session
from .password_reset_request import PasswordResetRequest

__all__ = [
    # Enums
    "SubjectType",
    "AccountStatus",
    "OnlineStatusValue",
    "EmployeeRole",
    "CUSTOMER_ROLE",
    # Entities
    "Employee",
    "SENSITIVE_FIELDS",
    "User",
    "Customer",
    "CustomerAccess",
    "OnlineStatus",
    "Session",
    "PasswordResetRequest",
]
