from typing import Optional

from fastapi import Request
from pydantic import BaseModel

UNKNOWN = "unknown"


class ClientMetadata(BaseModel):
    ip_address: str
    user_agent: str


def get_client_metadata(request: Request) -> ClientMetadata:
    """
    Client IP and user agent for session records.

    The first X-Forwarded-For hop wins over the socket peer, since the
    service normally sits behind a reverse proxy.
    """
    ip_address: Optional[str] = None
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        ip_address = forwarded.split(",")[0].strip() or None
    if ip_address is None and request.client is not None:
        ip_address = request.client.host

    return ClientMetadata(
        ip_address=ip_address or UNKNOWN,
        user_agent=request.headers.get("user-agent") or UNKNOWN,
    )
