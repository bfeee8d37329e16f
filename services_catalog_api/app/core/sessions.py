"""
Server-side session store.

Sessions are kept in process memory keyed by a random session id.
Each entry carries its own expiry; expired entries are dropped when
they are looked up, whenever a new session is created, and during
``purge_expired``.  The browser only receives the session id (signed,
see ``core.security``), so the authentication flag can never be forged
client-side.
"""

from __future__ import annotations

import secrets
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from .config import settings


@dataclass
class SessionContext:
    """Per-request view of the caller's session.

    Anonymous callers get a context with ``session_id`` set to ``None``.
    """

    session_id: Optional[str] = None
    is_authenticated: bool = False
    expires_at: float = field(default=0.0)


class SessionStore:
    """In-memory session store with per-entry expiry."""

    def __init__(self, ttl_seconds: Callable[[], float], clock: Callable[[], float] = time.time) -> None:
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._sessions: Dict[str, SessionContext] = {}
        self._lock = threading.Lock()

    def create(self, is_authenticated: bool = False) -> SessionContext:
        now = self._clock()
        session = SessionContext(
            session_id=secrets.token_urlsafe(32),
            is_authenticated=is_authenticated,
            expires_at=now + self._ttl_seconds(),
        )
        with self._lock:
            # Abandoned sessions are never looked up again; sweep them here.
            self._drop_expired(now)
            self._sessions[session.session_id] = session
        return session

    def get(self, session_id: str) -> Optional[SessionContext]:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return None
            if session.expires_at <= self._clock():
                del self._sessions[session_id]
                return None
            return session

    def destroy(self, session_id: str) -> bool:
        """Remove a session; returns whether it existed."""
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def purge_expired(self) -> int:
        """Drop every expired session; returns how many were removed."""
        now = self._clock()
        with self._lock:
            return self._drop_expired(now)

    def _drop_expired(self, now: float) -> int:
        # Caller holds the lock.
        expired = [sid for sid, s in self._sessions.items() if s.expires_at <= now]
        for sid in expired:
            del self._sessions[sid]
        return len(expired)

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()

    def __len__(self) -> int:
        return len(self._sessions)


def _configured_ttl() -> float:
    return settings.session_ttl_minutes * 60


session_store = SessionStore(ttl_seconds=_configured_ttl)
