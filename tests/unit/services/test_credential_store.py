from uuid import uuid4

import bcrypt
import pytest

from hrms_auth.app.services.credential_store import (
    CredentialStore,
    _dummy_hash,
    compare_password,
    hash_password,
)
from hrms_auth.domain.entities import (
    AccountStatus,
    Customer,
    CustomerAccess,
    Employee,
    SubjectType,
    User,
)

PASSWORD = "Secret123!"


def make_employee(mock_uow, status=AccountStatus.active, role="hr"):
    employee = Employee(id=uuid4(), name="Asha", official_email_id="official@co.com")
    user = User(
        employee_id=employee.id,
        password_hash=bcrypt.hashpw(PASSWORD.encode(), bcrypt.gensalt(4)).decode(),
        role=role,
        status=status,
    )
    mock_uow.employees.get_by_official_email.return_value = employee
    mock_uow.users.get_by_employee_id.return_value = user
    return employee, user


def make_customer(mock_uow, status=AccountStatus.active):
    customer = Customer(id=uuid4(), name="Globex", email="buyer@globex.com")
    access = CustomerAccess(
        customer_id=customer.id,
        password_hash=bcrypt.hashpw(PASSWORD.encode(), bcrypt.gensalt(4)).decode(),
        status=status,
    )
    mock_uow.customers.get_by_email.return_value = customer
    mock_uow.customer_access.get_by_customer_id.return_value = access
    return customer, access


def test_compare_password_rejects_malformed_input():
    valid_hash = hash_password(PASSWORD, rounds=4)

    assert compare_password(PASSWORD, valid_hash) is True
    assert compare_password("wrong", valid_hash) is False
    assert compare_password("", valid_hash) is False
    assert compare_password(PASSWORD, None) is False
    assert compare_password(PASSWORD, "plain-text-password") is False
    assert compare_password(PASSWORD, "$2b$garbage") is False


def test_compare_password_with_overlong_candidate_is_a_mismatch():
    valid_hash = hash_password(PASSWORD, rounds=4)

    assert compare_password("P" * 100, valid_hash) is False


def test_dummy_hash_is_computed_once():
    assert _dummy_hash() is _dummy_hash()
    assert _dummy_hash().startswith("$2")


@pytest.mark.asyncio
async def test_overlong_password_for_unknown_subject_is_invalid(mock_uow):
    result = await CredentialStore(mock_uow).verify(
        SubjectType.employee, "nobody@nowhere.com", "P" * 100
    )

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"


@pytest.mark.asyncio
async def test_verify_employee(mock_uow):
    # Arrange
    employee, _ = make_employee(mock_uow)
    store = CredentialStore(mock_uow)

    # Act
    result = await store.verify(SubjectType.employee, "official@co.com", PASSWORD)

    # Assert
    assert result.is_ok()
    assert result.value.subject_id == employee.id
    assert result.value.role == "hr"
    assert result.value.subject_type == SubjectType.employee


@pytest.mark.asyncio
async def test_verify_customer_has_customer_role(mock_uow):
    customer, _ = make_customer(mock_uow)
    store = CredentialStore(mock_uow)

    result = await store.verify(SubjectType.customer, "buyer@globex.com", PASSWORD)

    assert result.is_ok()
    assert result.value.subject_id == customer.id
    assert result.value.role == "customer"


@pytest.mark.asyncio
async def test_unknown_subject_and_wrong_password_are_indistinguishable(mock_uow):
    store = CredentialStore(mock_uow)

    unknown = await store.verify(SubjectType.employee, "ghost@co.com", PASSWORD)
    make_employee(mock_uow)
    wrong = await store.verify(SubjectType.employee, "official@co.com", "not-it")

    assert unknown.is_err() and wrong.is_err()
    assert unknown.error == wrong.error
    assert unknown.error.code == "INVALID_CREDENTIALS"


@pytest.mark.asyncio
async def test_inactive_account_cannot_verify(mock_uow):
    make_employee(mock_uow, status=AccountStatus.inactive)
    store = CredentialStore(mock_uow)

    result = await store.verify(SubjectType.employee, "official@co.com", PASSWORD)

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"


@pytest.mark.asyncio
async def test_find_account_prefers_employee(mock_uow):
    employee, _ = make_employee(mock_uow)
    make_customer(mock_uow)
    store = CredentialStore(mock_uow)

    account = await store.find_account("official@co.com")

    assert account.subject_type == SubjectType.employee
    assert account.subject_id == employee.id


@pytest.mark.asyncio
async def test_find_account_falls_back_to_customer(mock_uow):
    customer, _ = make_customer(mock_uow)
    store = CredentialStore(mock_uow)

    account = await store.find_account("buyer@globex.com")

    assert account.subject_type == SubjectType.customer
    assert account.subject_id == customer.id


@pytest.mark.asyncio
async def test_employee_without_credential_row_is_inactive(mock_uow):
    make_employee(mock_uow)
    mock_uow.users.get_by_employee_id.return_value = None
    store = CredentialStore(mock_uow)

    account = await store.find_account("official@co.com")

    assert account is not None
    assert account.is_active is False


@pytest.mark.asyncio
async def test_set_password_routes_by_subject_type(mock_uow):
    store = CredentialStore(mock_uow)
    employee_id, customer_id = uuid4(), uuid4()

    await store.set_password(SubjectType.employee, employee_id, "$2b$hash-e")
    await store.set_password(SubjectType.customer, customer_id, "$2b$hash-c")

    mock_uow.users.update_password.assert_called_once_with(employee_id, "$2b$hash-e")
    mock_uow.customer_access.update_password.assert_called_once_with(customer_id, "$2b$hash-c")


@pytest.mark.asyncio
async def test_get_role(mock_uow):
    store = CredentialStore(mock_uow)
    employee, _ = make_employee(mock_uow, role="manager")

    assert await store.get_role(SubjectType.employee, employee.id) == "manager"
    assert await store.get_role(SubjectType.customer, uuid4()) == "customer"

    mock_uow.users.get_by_employee_id.return_value = None
    assert await store.get_role(SubjectType.employee, employee.id) == "employee"
