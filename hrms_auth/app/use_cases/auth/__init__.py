"""
Authentication Use Cases

Session lifecycle (login, extend, logout) and the password reset pipeline.
"""

from .login_use_case import LoginUseCase
from .extend_session_use_case import ExtendSessionUseCase
from .logout_use_case import LogoutUseCase
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .validate_reset_link_use_case import ValidateResetLinkUseCase
from .reset_password_use_case import ResetPasswordUseCase
from .dtos import (
    AccessTokenResponse,
    IssuedSession,
    LogoutResponse,
    RequestPasswordResetResponse,
    ResetPasswordResponse,
    SubjectInfo,
    ValidateResetLinkResponse,
)

__all__ = [
    # Use Cases
    "LoginUseCase",
    "ExtendSessionUseCase",
    "LogoutUseCase",
    "RequestPasswordResetUseCase",
    "ValidateResetLinkUseCase",
    "ResetPasswordUseCase",
    # DTOs - Responses
    "AccessTokenResponse",
    "IssuedSession",
    "LogoutResponse",
    "RequestPasswordResetResponse",
    "ValidateResetLinkResponse",
    "ResetPasswordResponse",
    # DTOs - Nested Models
    "SubjectInfo",
]
