"""
Unit tests for the in-memory session store.
"""

from services_catalog_api.app.core.sessions import SessionContext, SessionStore


class FakeClock:
    def __init__(self) -> None:
        self.now = 1_000.0

    def __call__(self) -> float:
        return self.now


def _store(clock: FakeClock, ttl: float = 60.0) -> SessionStore:
    return SessionStore(ttl_seconds=lambda: ttl, clock=clock)


def test_create_and_get() -> None:
    store = _store(FakeClock())
    session = store.create(is_authenticated=True)

    assert session.session_id
    assert store.get(session.session_id) is session
    assert store.get(session.session_id).is_authenticated is True


def test_sessions_expire() -> None:
    clock = FakeClock()
    store = _store(clock, ttl=60)
    session = store.create(is_authenticated=True)

    clock.now += 59
    assert store.get(session.session_id) is not None
    clock.now += 1
    assert store.get(session.session_id) is None
    assert len(store) == 0


def test_destroy() -> None:
    store = _store(FakeClock())
    session = store.create()

    assert store.destroy(session.session_id) is True
    assert store.destroy(session.session_id) is False
    assert store.get(session.session_id) is None


def test_purge_expired_only_drops_expired() -> None:
    clock = FakeClock()
    store = _store(clock, ttl=10)
    old = store.create()
    clock.now += 5
    fresh = store.create()
    clock.now += 6

    assert store.purge_expired() == 1
    assert store.get(old.session_id) is None
    assert store.get(fresh.session_id) is fresh


def test_anonymous_context_defaults() -> None:
    ctx = SessionContext()
    assert ctx.session_id is None
    assert ctx.is_authenticated is False


def test_creating_a_session_drops_abandoned_expired_ones() -> None:
    clock = FakeClock()
    store = _store(clock, ttl=10)
    for _ in range(5):
        store.create(is_authenticated=True)
    clock.now += 11

    fresh = store.create(is_authenticated=True)

    assert len(store) == 1
    assert store.get(fresh.session_id) is fresh
