"""
Immutable security settings.

Built once from ApplicationConfig when the app is created and handed to the
services that need it (field cipher, token issuer, cookies).
"""

from datetime import timedelta

from pydantic import BaseModel, ConfigDict


class AuthSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    environment: str = "development"

    jwt_secret: str
    jwt_algorithm: str = "HS256"
    access_token_expires_minutes: int = 30
    refresh_token_max_age_days: int = 7
    refresh_cookie_name: str = "refreshToken"

    encryption_key: str
    encryption_salt: str = "salt"
    field_cipher_strict: bool = False

    password_reset_ttl_minutes: int = 15
    reset_token_length: int = 32
    frontend_url: str = "http://localhost:3000"
    bcrypt_rounds: int = 10

    revoked_session_retention_days: int = 30
    admin_api_key: str = ""

    @classmethod
    def from_config(cls, config) -> "AuthSettings":
        return cls(
            environment=config.ENVIRONMENT,
            jwt_secret=config.JWT_SECRET,
            jwt_algorithm=config.JWT_ALGORITHM,
            access_token_expires_minutes=config.ACCESS_TOKEN_EXPIRES_MINUTES,
            refresh_token_max_age_days=config.REFRESH_TOKEN_MAX_AGE_DAYS,
            refresh_cookie_name=config.REFRESH_TOKEN_COOKIE_NAME,
            encryption_key=config.ENCRYPTION_KEY,
            encryption_salt=config.ENCRYPTION_SALT,
            field_cipher_strict=config.FIELD_CIPHER_STRICT,
            password_reset_ttl_minutes=config.PASSWORD_RESET_TTL_MINUTES,
            reset_token_length=config.RESET_TOKEN_LENGTH,
            frontend_url=config.FRONTEND_URL,
            bcrypt_rounds=config.BCRYPT_ROUNDS,
            revoked_session_retention_days=config.REVOKED_SESSION_RETENTION_DAYS,
            admin_api_key=config.ADMIN_API_KEY,
        )

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def access_token_ttl(self) -> timedelta:
        return timedelta(minutes=self.access_token_expires_minutes)

    @property
    def refresh_token_ttl(self) -> timedelta:
        return timedelta(days=self.refresh_token_max_age_days)

    @property
    def password_reset_ttl(self) -> timedelta:
        return timedelta(minutes=self.password_reset_ttl_minutes)
