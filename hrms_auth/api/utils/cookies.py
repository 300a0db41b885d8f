"""
Refresh token cookie helpers.

The refresh secret travels only in an httpOnly cookie scoped to "/".
Development serves plain HTTP on localhost, so the cookie is lax and
non-secure there; production is cross-site over HTTPS and needs
SameSite=None with Secure.
"""

from typing import Optional

from fastapi import Request, Response

from hrms_auth.settings import AuthSettings

COOKIE_PATH = "/"


def cookie_options(settings: AuthSettings) -> dict:
    if settings.is_production:
        return {"httponly": True, "secure": True, "samesite": "none", "path": COOKIE_PATH}
    return {"httponly": True, "secure": False, "samesite": "lax", "path": COOKIE_PATH}


def set_refresh_cookie(
    response: Response, settings: AuthSettings, refresh_token: str, max_age: int
) -> None:
    response.set_cookie(
        key=settings.refresh_cookie_name,
        value=refresh_token,
        max_age=max_age,
        **cookie_options(settings),
    )


def clear_refresh_cookie(response: Response, settings: AuthSettings) -> None:
    """Expire the cookie (Max-Age=0) with the attributes it was set with"""
    options = cookie_options(settings)
    response.delete_cookie(
        key=settings.refresh_cookie_name,
        path=options["path"],
        secure=options["secure"],
        httponly=options["httponly"],
        samesite=options["samesite"],
    )


def read_refresh_cookie(request: Request, settings: AuthSettings) -> Optional[str]:
    return request.cookies.get(settings.refresh_cookie_name) or None
