from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from hrms_auth.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from hrms_auth.app.services.email_sender import IEmailSender
from hrms_auth.app.services.field_cipher import FieldCipher
from hrms_auth.app.services.token_issuer import TokenIssuer
from hrms_auth.domain.entities import SubjectType
from hrms_auth.settings import AuthSettings

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)


class CurrentSubject(BaseModel):
    """Verified identity handed to every authenticated route"""

    subject_id: str
    subject_type: SubjectType
    role: str
    email: Optional[str] = None


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_settings(request: Request) -> AuthSettings:
    return request.app.state.settings


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


def get_field_cipher(request: Request) -> FieldCipher:
    return request.app.state.field_cipher


def get_email_sender(request: Request) -> IEmailSender:
    return request.app.state.email_sender


async def get_current_subject(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
) -> CurrentSubject:
    """
    Dependency to extract and verify the access token from the Authorization header.

    Returns:
        CurrentSubject built from the token claims

    Raises:
        HTTPException: 401 if the bearer is missing, invalid or expired
    """
    payload = token_issuer.verify_access_token(credentials.credentials) if credentials else None

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return CurrentSubject(
        subject_id=payload["subject_id"],
        subject_type=payload["subject_type"],
        role=payload["role"],
        email=payload.get("email"),
    )
