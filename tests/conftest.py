"""
Shared test configuration.

Every test runs against its own SQLite file and upload directory in
``tmp_path`` and a known admin password, so tests never touch real
data and never depend on each other.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from services_catalog_api.app.core.config import settings  # noqa: E402
from services_catalog_api.app.core.db import init_db  # noqa: E402
from services_catalog_api.app.core.security import hash_password  # noqa: E402
from services_catalog_api.app.core.sessions import session_store  # noqa: E402
from services_catalog_api.app.services.payment_service import PaymentService  # noqa: E402

ADMIN_PASSWORD = "correct"
ADMIN_PASSWORD_HASH = hash_password(ADMIN_PASSWORD)


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point storage at ``tmp_path`` and use deterministic credentials."""

    monkeypatch.setattr(settings, "database_url", str(tmp_path / "services.db"))
    monkeypatch.setattr(settings, "upload_dir", str(tmp_path / "uploads"))
    monkeypatch.setattr(settings, "cleanup_enabled", False)
    monkeypatch.setattr(settings, "admin_password_hash", ADMIN_PASSWORD_HASH)
    monkeypatch.setattr(settings, "session_secret", "test-session-secret")
    monkeypatch.setattr(settings, "session_cookie_secure", False)
    monkeypatch.setattr(settings, "shop_id", "123456")
    monkeypatch.setattr(settings, "payment_key", "test_key")
    monkeypatch.setattr(settings, "payment_api_url", "https://gateway.test/v3/payments")
    monkeypatch.setattr(settings, "payment_return_url", "https://shop.test")
    monkeypatch.setattr(PaymentService, "transport", None)
    session_store.clear()
    init_db()
    yield
    session_store.clear()


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    path = tmp_path / "uploads"
    path.mkdir(exist_ok=True)
    return path
