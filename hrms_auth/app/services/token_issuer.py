"""
Token Issuer

Mints short-lived signed access tokens and opaque refresh secrets.
"""

import hashlib
import secrets
from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from hrms_auth.domain.entities import SubjectType

REFRESH_SECRET_BYTES = 48
ACCESS_TOKEN_TYPE = "access"
REQUIRED_CLAIMS = ("subject_id", "subject_type", "role")


class TokenIssuer:
    def __init__(self, secret: str, algorithm: str, access_token_ttl: timedelta):
        self.secret = secret
        self.algorithm = algorithm
        self.access_token_ttl = access_token_ttl

    @classmethod
    def from_settings(cls, settings) -> "TokenIssuer":
        return cls(settings.jwt_secret, settings.jwt_algorithm, settings.access_token_ttl)

    @property
    def access_token_expires_in(self) -> int:
        """Access token lifetime in seconds"""
        return int(self.access_token_ttl.total_seconds())

    def issue_access_token(
        self,
        subject_id: UUID,
        role: str,
        subject_type: SubjectType,
        email: Optional[str] = None,
    ) -> str:
        """
        Generate a signed access token.

        Args:
            subject_id: Employee or customer UUID
            role: Role copied into the token
            subject_type: employee / customer discriminator
            email: Login email, informational only

        Returns:
            JWT string; never persisted server-side
        """
        now = datetime.now(UTC)
        payload = {
            "subject_id": str(subject_id),
            "subject_type": SubjectType(subject_type).value,
            "role": role,
            "email": email,
            "type": ACCESS_TOKEN_TYPE,
            "iat": now,
            "exp": now + self.access_token_ttl,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify_access_token(self, token: str) -> Optional[dict]:
        """
        Verify signature and expiry.

        Returns:
            Decoded claims, or None if the token is invalid, expired or not an access token
        """
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError:
            return None

        if payload.get("type") != ACCESS_TOKEN_TYPE:
            return None
        if any(not payload.get(claim) for claim in REQUIRED_CLAIMS):
            return None
        return payload

    @staticmethod
    def issue_refresh_secret() -> str:
        """96 hex characters of CSPRNG output"""
        return secrets.token_hex(REFRESH_SECRET_BYTES)

    @staticmethod
    def hash(secret: str) -> str:
        """SHA-256 hex digest; the only form of a refresh secret that is stored"""
        return hashlib.sha256(secret.encode("utf-8")).hexdigest()
