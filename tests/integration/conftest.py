from http.cookies import SimpleCookie
from types import SimpleNamespace
from typing import List, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from hrms_auth.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from hrms_auth.api.app import create_app
from hrms_auth.app.services.credential_store import hash_password
from hrms_auth.app.services.email_sender import EmailMessage, IEmailSender
from hrms_auth.app.services.field_cipher import FieldCipher
from hrms_auth.depends import get_unit_of_work
from hrms_auth.domain.entities import (
    AccountStatus,
    Customer,
    CustomerAccess,
    Employee,
    EmployeeRole,
    User,
)

PASSWORD = "Secret123!"
COOKIE_NAME = ApplicationConfig.REFRESH_TOKEN_COOKIE_NAME


class RecordingEmailSender(IEmailSender):
    """Keeps outgoing mail in memory instead of delivering it"""

    def __init__(self):
        self.sent: List[EmailMessage] = []

    async def send(self, message: EmailMessage) -> None:
        self.sent.append(message)


def refresh_cookie_from(response) -> Optional[str]:
    """Value of the refresh cookie in a response's Set-Cookie headers"""
    for header in response.headers.get_list("set-cookie"):
        cookie = SimpleCookie()
        cookie.load(header)
        if COOKIE_NAME in cookie:
            return cookie[COOKIE_NAME].value
    return None


def cookie_header(refresh_token: str) -> dict:
    return {"Cookie": f"{COOKIE_NAME}={refresh_token}"}


@pytest.fixture
def read_refresh_cookie():
    return refresh_cookie_from


@pytest.fixture
def with_refresh_cookie():
    return cookie_header


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest.fixture
def email_sender():
    return RecordingEmailSender()


@pytest.fixture
def cipher():
    return FieldCipher(ApplicationConfig.ENCRYPTION_KEY, ApplicationConfig.ENCRYPTION_SALT)


@pytest_asyncio.fixture
async def client(db_session, email_sender):
    app = create_app(ApplicationConfig, email_sender=email_sender)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


async def create_employee(
    db_session,
    email: str,
    role: str = EmployeeRole.hr.value,
    status: AccountStatus = AccountStatus.active,
    **pii,
) -> SimpleNamespace:
    employee = Employee(name="Asha Rao", official_email_id=email, **pii)
    db_session.add(employee)
    await db_session.flush()
    user = User(
        employee_id=employee.id,
        password_hash=hash_password(PASSWORD, 4),
        role=role,
        status=status,
    )
    db_session.add(user)
    await db_session.commit()
    return SimpleNamespace(id=employee.id, email=email, role=role, password=PASSWORD)


async def create_customer(
    db_session, email: str, status: AccountStatus = AccountStatus.active
) -> SimpleNamespace:
    customer = Customer(name="Globex Corp", email=email)
    db_session.add(customer)
    await db_session.flush()
    db_session.add(
        CustomerAccess(
            customer_id=customer.id,
            password_hash=hash_password(PASSWORD, 4),
            status=status,
        )
    )
    await db_session.commit()
    return SimpleNamespace(id=customer.id, email=email, role="customer", password=PASSWORD)


@pytest_asyncio.fixture
async def employee(db_session, cipher):
    return await create_employee(
        db_session,
        "asha.rao@acme.com",
        pan_card_number=cipher.encrypt("ABCDE1234F"),
        bank_account_number=cipher.encrypt("001122334455"),
        aadhaar_card_number="123412341234",
    )


@pytest_asyncio.fixture
async def customer(db_session):
    return await create_customer(db_session, "buyer@globex.com")


@pytest_asyncio.fixture
async def inactive_employee(db_session):
    return await create_employee(
        db_session, "former.staff@acme.com", status=AccountStatus.inactive
    )


@pytest_asyncio.fixture
async def logged_in(client, employee):
    """Employee login response plus the refresh secret it set"""
    response = await client.post(
        "/auth/login", json={"email": employee.email, "password": employee.password}
    )
    assert response.status_code == 200
    client.cookies.clear()
    return SimpleNamespace(
        body=response.json(),
        refresh_token=refresh_cookie_from(response),
        subject=employee,
    )
