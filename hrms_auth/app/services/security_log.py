"""
Security event logging.

Security-relevant outcomes (failed logins, rotation conflicts, undecryptable
fields) go to a dedicated logger so they can be routed separately. Secrets,
passwords and full token hashes are never passed here; use preview() for
anything derived from them.
"""

import logging
from typing import Any, Optional

security_logger = logging.getLogger("hrms_auth.security")

_LEVELS = {
    "low": logging.INFO,
    "medium": logging.WARNING,
    "high": logging.ERROR,
    "critical": logging.CRITICAL,
}


def preview(value: Optional[str], length: int = 8) -> str:
    """Truncated view of a sensitive string, safe to log."""
    if not value:
        return ""
    if len(value) <= length:
        return value[: max(1, length // 2)] + "..."
    return value[:length] + "..."


def log_security_event(event: str, severity: str = "medium", **context: Any) -> None:
    level = _LEVELS.get(severity, logging.WARNING)
    details = " ".join(f"{key}={value}" for key, value in sorted(context.items()))
    security_logger.log(level, f"SECURITY {event} severity={severity} {details}".rstrip())
