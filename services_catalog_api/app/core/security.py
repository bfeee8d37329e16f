"""
Security helpers for password hashing and session cookies.

Passwords are checked against a pre-hashed admin secret.  Two hash
formats are accepted: PBKDF2‑HMAC‑SHA256 stored as ``salthex$hashhex``
(what ``hash_password`` and ``hash_admin_password.py`` produce) and
bcrypt hashes (``$2a$``/``$2b$``/``$2y$``), which existing deployments
already carry in ``ADMIN_PASSWORD_HASH``.  Both comparisons are
constant-time.

Session cookies hold the session id followed by an HMAC‑SHA256
signature made with ``settings.session_secret``.  The ``get_session``
dependency resolves the cookie into a ``SessionContext`` and
``require_auth`` guards admin routes.
"""

import base64
import hashlib
import hmac
import logging
import os
from typing import Optional

import bcrypt
from fastapi import Depends, Request, Response

from .config import settings
from .errors import UnauthorizedError
from .sessions import SessionContext, session_store

logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 100_000
BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")
BCRYPT_MAX_PASSWORD_BYTES = 72


def _b64_url_encode(data: bytes) -> str:
    """Base64‑url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64‑url encoded string, adding padding if necessary."""
    padding = '=' * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    """Compute HMAC‑SHA256 signature of a message using the given secret."""
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def sign_session_id(session_id: str) -> str:
    """Return the cookie value for a session id: ``<sid>.<signature>``."""
    signature = _sign(session_id.encode("utf-8"), settings.session_secret)
    return f"{session_id}.{_b64_url_encode(signature)}"


def unsign_session_id(cookie_value: str) -> Optional[str]:
    """Verify a cookie value and return the session id, or ``None`` if tampered."""
    session_id, sep, signature_b64 = cookie_value.rpartition(".")
    if not sep or not session_id:
        return None
    try:
        actual_sig = _b64_url_decode(signature_b64)
    except ValueError:
        return None
    expected_sig = _sign(session_id.encode("utf-8"), settings.session_secret)
    if not hmac.compare_digest(expected_sig, actual_sig):
        return None
    return session_id


def hash_password(password: str) -> str:
    """Hash a password using PBKDF2‑HMAC with SHA‑256.

    A 16‑byte random salt is generated for each password.  The
    resulting string contains the salt and hash separated by a
    ``$`` (salt in hex, then hash in hex).
    """
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac('sha256', password.encode('utf-8'), salt, PBKDF2_ITERATIONS)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a stored PBKDF2 or bcrypt hash.

    Returns ``False`` for an empty or malformed stored hash instead of
    raising, so a misconfigured deployment simply rejects every login.
    """
    if not hashed_password:
        return False
    if hashed_password.startswith(BCRYPT_PREFIXES):
        try:
            # bcrypt only uses the first 72 bytes; bcrypt>=5 raises instead of truncating.
            candidate = plain_password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]
            return bcrypt.checkpw(candidate, hashed_password.encode("utf-8"))
        except ValueError:
            logger.error("ADMIN_PASSWORD_HASH is not a valid bcrypt hash")
            return False
    try:
        salt_hex, hash_hex = hashed_password.split('$', 1)
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except ValueError:
        logger.error("ADMIN_PASSWORD_HASH is neither bcrypt nor salthex$hashhex")
        return False
    dk = hashlib.pbkdf2_hmac('sha256', plain_password.encode('utf-8'), salt, PBKDF2_ITERATIONS)
    return hmac.compare_digest(dk, stored_hash)


def set_session_cookie(response: Response, session: SessionContext) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=sign_session_id(session.session_id),
        max_age=settings.session_ttl_minutes * 60,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )


def get_session(request: Request) -> SessionContext:
    """Dependency that resolves the caller's session.

    Missing, tampered or expired cookies yield an anonymous context.
    """
    cookie_value = request.cookies.get(settings.session_cookie_name)
    if not cookie_value:
        return SessionContext()
    session_id = unsign_session_id(cookie_value)
    if session_id is None:
        logger.warning("Rejected session cookie with invalid signature")
        return SessionContext()
    return session_store.get(session_id) or SessionContext()


def require_auth(session: SessionContext = Depends(get_session)) -> SessionContext:
    """Dependency guarding admin routes.

    Raises ``UnauthorizedError`` (HTTP 401) before the endpoint body
    runs when the session is not authenticated.
    """
    if not session.is_authenticated:
        raise UnauthorizedError()
    return session
