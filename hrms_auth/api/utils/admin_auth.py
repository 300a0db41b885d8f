"""
Admin API Key Authentication

Validates admin API keys for housekeeping endpoints.
"""

import secrets

from fastapi import Depends, Header, status

from hrms_auth.api.error import ClientError
from hrms_auth.depends import get_settings
from hrms_auth.result import Error
from hrms_auth.settings import AuthSettings


async def verify_admin_api_key(
    x_admin_api_key: str = Header(None),
    settings: AuthSettings = Depends(get_settings),
):
    """
    Verify admin API key from X-Admin-API-Key header.

    Used by schedulers and other internal callers, not by end users.

    Raises:
        ClientError: 401 if key is missing or invalid
    """
    if not x_admin_api_key:
        raise ClientError(
            Error("UNAUTHORIZED", "Admin API key required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    if not settings.admin_api_key or not secrets.compare_digest(
        x_admin_api_key, settings.admin_api_key
    ):
        raise ClientError(
            Error("INVALID_API_KEY", "Invalid admin API key"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return True
