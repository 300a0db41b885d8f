import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./hrms_auth.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENVIRONMENT = data.get("ENVIRONMENT", "development")

    # Access / refresh tokens
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRES_MINUTES = int(data.get("ACCESS_TOKEN_EXPIRES_MINUTES", 30))
    REFRESH_TOKEN_MAX_AGE_DAYS = int(data.get("REFRESH_TOKEN_MAX_AGE_DAYS", 7))
    REFRESH_TOKEN_COOKIE_NAME = data.get("REFRESH_TOKEN_COOKIE_NAME", "refreshToken")

    # Field-level encryption of PII and reset tokens
    ENCRYPTION_KEY = data.get("ENCRYPTION_KEY", "hrms-secure-key-change-in-production")
    ENCRYPTION_SALT = data.get("ENCRYPTION_SALT", "salt")
    FIELD_CIPHER_STRICT = bool(data.get("FIELD_CIPHER_STRICT", False))

    # Password reset
    PASSWORD_RESET_TTL_MINUTES = int(data.get("PASSWORD_RESET_TTL_MINUTES", 15))
    RESET_TOKEN_LENGTH = int(data.get("RESET_TOKEN_LENGTH", 32))
    FRONTEND_URL = data.get("FRONTEND_URL", "http://localhost:3000")
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 10))

    REVOKED_SESSION_RETENTION_DAYS = int(data.get("REVOKED_SESSION_RETENTION_DAYS", 30))
    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")
