"""
Authentication error catalogue.

Client-facing messages are deliberately generic; the specific reason is only
ever written to the server log.
"""

from hrms_auth.result import Error

INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
RESET_TOKEN_INVALID = "RESET_TOKEN_INVALID"
DEACTIVATED_ACCOUNT = "DEACTIVATED_ACCOUNT"
INVALID_PASSWORD = "INVALID_PASSWORD"
INTERNAL_ERROR = "INTERNAL_ERROR"


def session_not_found() -> Error:
    return Error(SESSION_NOT_FOUND, "Invalid or expired refresh token")


def reset_token_invalid() -> Error:
    return Error(RESET_TOKEN_INVALID, "Looks like your reset link is expired.")


def deactivated_account() -> Error:
    return Error(
        DEACTIVATED_ACCOUNT,
        "Your account is in deactivated state, contact HR to activate the account.",
    )
