"""
Auth Service Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class SubjectType(str, Enum):
    """Kind of identity that can authenticate"""

    employee = "employee"
    customer = "customer"


class AccountStatus(str, Enum):
    """Credential status - only ACTIVE accounts may log in or reset"""

    active = "ACTIVE"
    inactive = "INACTIVE"


class OnlineStatusValue(str, Enum):
    """Employee presence flag"""

    online = "ONLINE"
    offline = "OFFLINE"


class EmployeeRole(str, Enum):
    """Application roles carried by employee credentials"""

    super_user = "super_user"
    hr = "hr"
    manager = "manager"
    employee = "employee"


CUSTOMER_ROLE = "customer"
