"""
Authentication Use Case DTOs (Data Transfer Objects)

All Response classes for the auth domain.
Provides type safety and clear contracts between layers.
"""

from typing import Optional
from pydantic import BaseModel


# ============================================================================
# Session DTOs
# ============================================================================


class SubjectInfo(BaseModel):
    """Authenticated subject in token responses"""

    id: str
    type: str
    role: str
    email: Optional[str] = None


class AccessTokenResponse(BaseModel):
    """Body of login and extend-session responses"""

    token: str
    token_type: str = "Bearer"
    expires_in: int
    subject: SubjectInfo


class IssuedSession(BaseModel):
    """
    Login / extend outcome.

    refresh_token is the raw secret; the route moves it into the cookie and
    only `response` is serialized.
    """

    response: AccessTokenResponse
    refresh_token: str
    refresh_max_age: int


class LogoutResponse(BaseModel):
    """Response for logout use case"""

    cleared: bool = True


# ============================================================================
# Password Reset DTOs
# ============================================================================


class RequestPasswordResetResponse(BaseModel):
    """Response for request password reset use case"""

    status: str
    message: str


class ValidateResetLinkResponse(BaseModel):
    """Response for validate reset link use case"""

    valid: bool
    email: str


class ResetPasswordResponse(BaseModel):
    """Response for reset password use case"""

    status: str
    message: str
