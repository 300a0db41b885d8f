from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from hrms_auth.app.services.field_cipher import FieldCipher
from hrms_auth.app.services.token_issuer import TokenIssuer
from hrms_auth.settings import AuthSettings


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.employees = MagicMock()
    uow.employees.get_by_id = AsyncMock(return_value=None)
    uow.employees.get_by_official_email = AsyncMock(return_value=None)

    uow.users = MagicMock()
    uow.users.get_by_employee_id = AsyncMock(return_value=None)
    uow.users.update_last_login = AsyncMock(return_value=1)
    uow.users.update_password = AsyncMock(return_value=1)

    uow.customers = MagicMock()
    uow.customers.get_by_id = AsyncMock(return_value=None)
    uow.customers.get_by_email = AsyncMock(return_value=None)

    uow.customer_access = MagicMock()
    uow.customer_access.get_by_customer_id = AsyncMock(return_value=None)
    uow.customer_access.update_last_login = AsyncMock(return_value=1)
    uow.customer_access.update_password = AsyncMock(return_value=1)

    uow.online_status = MagicMock()
    uow.online_status.upsert = AsyncMock()
    uow.online_status.mark_offline = AsyncMock(return_value=0)

    uow.sessions = MagicMock()
    uow.sessions.create = AsyncMock(side_effect=lambda session: session)
    uow.sessions.find_by_token_hash = AsyncMock(return_value=None)
    uow.sessions.rotate = AsyncMock(return_value=1)
    uow.sessions.revoke = AsyncMock(return_value=1)
    uow.sessions.get_expired_subject_ids = AsyncMock(return_value=[])
    uow.sessions.get_active_subject_ids = AsyncMock(return_value=[])
    uow.sessions.delete_revoked_before = AsyncMock(return_value=0)

    uow.password_resets = MagicMock()
    uow.password_resets.replace_for_email = AsyncMock(side_effect=lambda request: request)
    uow.password_resets.get_by_token = AsyncMock(return_value=None)
    uow.password_resets.delete_by_email = AsyncMock(return_value=1)

    return uow


@pytest.fixture
def settings():
    return AuthSettings(
        jwt_secret="unit-test-jwt-secret",
        encryption_key="unit-test-encryption-key",
        bcrypt_rounds=4,
    )


@pytest.fixture
def token_issuer(settings):
    return TokenIssuer(settings.jwt_secret, settings.jwt_algorithm, settings.access_token_ttl)


@pytest.fixture(scope="session")
def cipher():
    return FieldCipher("unit-test-encryption-key", "salt")


@pytest.fixture
def session_ttl():
    return timedelta(days=7)
