"""
Admin login and logout.

There is a single admin identity guarded by ``ADMIN_PASSWORD_HASH``.
A successful login creates an authenticated server-side session; the
endpoint then hands its id to the browser as a signed cookie.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi.concurrency import run_in_threadpool

from services_catalog_api.app.core.config import settings
from services_catalog_api.app.core.errors import SessionStoreError, UnauthorizedError, ValidationError
from services_catalog_api.app.core.security import verify_password
from services_catalog_api.app.core.sessions import SessionContext, session_store

logger = logging.getLogger(__name__)


class AuthService:
    """Service class for admin authentication."""

    @classmethod
    async def login(cls, password: Optional[str], current: SessionContext) -> SessionContext:
        """Check the admin password and open an authenticated session.

        Any session the caller already had is replaced.
        """
        if not password:
            raise ValidationError("Пароль обязателен")
        if not settings.admin_password_hash:
            logger.error("ADMIN_PASSWORD_HASH is not configured; rejecting login")
        # Hashing is CPU bound, keep it off the event loop.
        is_match = await run_in_threadpool(verify_password, password, settings.admin_password_hash)
        if not is_match:
            logger.warning("Failed admin login attempt")
            raise UnauthorizedError("Неверный пароль")

        if current.session_id:
            session_store.destroy(current.session_id)
        session = session_store.create(is_authenticated=True)
        logger.info("Admin logged in")
        return session

    @classmethod
    async def logout(cls, current: SessionContext) -> None:
        """Destroy the caller's session; does not require being logged in."""
        if not current.session_id:
            return
        try:
            session_store.destroy(current.session_id)
        except Exception as e:
            logger.error("Failed to destroy session: %s", e)
            raise SessionStoreError() from e
        logger.info("Admin logged out")

    @classmethod
    def check_auth(cls, current: SessionContext) -> bool:
        return current.is_authenticated
