"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
application starts in development without any setup; in production
override them via environment variables (``run.py`` also loads a
``.env`` file before this module is imported).
"""

import os
from dataclasses import dataclass, field
from typing import List

PRODUCTION_ORIGINS = ["https://gexpc.ru", "https://95.163.222.63"]
DEVELOPMENT_ORIGINS = ["http://localhost:3000", "http://localhost:63342"]


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


def _default_cors_origins() -> List[str]:
    raw = os.getenv("CORS_ORIGINS", "")
    if raw:
        return [origin.strip() for origin in raw.split(",") if origin.strip()]
    environment = os.getenv("ENVIRONMENT", os.getenv("NODE_ENV", "development"))
    if environment == "production":
        return list(PRODUCTION_ORIGINS)
    return list(DEVELOPMENT_ORIGINS)


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Services Catalog API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "5001"))
    # ``NODE_ENV`` is still honoured so existing deployments keep working.
    environment: str = os.getenv("ENVIRONMENT", os.getenv("NODE_ENV", "development"))

    # Sessions.  The cookie only carries a signed session id; the
    # session itself lives in the server-side store.
    session_secret: str = os.getenv("SESSION_SECRET", "your-secret-key")
    session_ttl_minutes: int = int(os.getenv("SESSION_TTL_MINUTES", str(60 * 24)))
    session_cookie_name: str = os.getenv("SESSION_COOKIE_NAME", "sid")
    session_cookie_secure: bool = _env_bool("SESSION_COOKIE_SECURE")

    # Pre-hashed admin password: PBKDF2 ``salthex$hashhex`` as produced by
    # ``hash_admin_password.py`` or a bcrypt ``$2b$...`` hash.
    admin_password_hash: str = os.getenv("ADMIN_PASSWORD_HASH", "")

    # YooKassa credentials and request settings.
    shop_id: str = os.getenv("SHOP_ID", "")
    payment_key: str = os.getenv("PAYMENT_KEY", "")
    payment_api_url: str = os.getenv("PAYMENT_API_URL", "https://api.yookassa.ru/v3/payments")
    payment_return_url: str = os.getenv("PAYMENT_RETURN_URL", "https://gexpc.ru")
    payment_currency: str = os.getenv("PAYMENT_CURRENCY", "RUB")
    payment_timeout_seconds: float = float(os.getenv("PAYMENT_TIMEOUT_SECONDS", "30"))

    # Storage.  Relative paths are resolved against the working directory.
    database_url: str = os.getenv("DATABASE_URL", "services.db")
    upload_dir: str = os.getenv("UPLOAD_DIR", "uploads")
    max_upload_bytes: int = int(os.getenv("MAX_UPLOAD_BYTES", str(5 * 1024 * 1024)))

    # Orphaned-photo cleanup: once at startup, then every interval.
    cleanup_enabled: bool = _env_bool("CLEANUP_ENABLED", "true")
    cleanup_interval_hours: float = float(os.getenv("CLEANUP_INTERVAL_HOURS", "24"))

    cors_origins: List[str] = field(default_factory=_default_cors_origins)


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# must be set before importing this module.
settings = Settings()
