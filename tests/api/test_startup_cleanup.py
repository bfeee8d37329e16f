# This file tests that application startup launches the orphaned-photo
# cleanup and that shutdown stops it again.

from __future__ import annotations

import time
from pathlib import Path

import pytest

from services_catalog_api.app.core.config import settings
from services_catalog_api.app.main import app
from tests.api.support import api_test_client


def test_startup_sweeps_orphaned_files(monkeypatch: pytest.MonkeyPatch, upload_dir: Path) -> None:
    orphan = upload_dir / "1700000000000-1.jpg"
    orphan.write_bytes(b"orphan")
    monkeypatch.setattr(settings, "cleanup_enabled", True)

    with api_test_client():
        deadline = time.monotonic() + 5
        while orphan.exists() and time.monotonic() < deadline:
            time.sleep(0.05)
        task = app.state.cleanup_task
        assert task is not None

    assert not orphan.exists()
    assert task.done()


def test_cleanup_task_not_started_when_disabled() -> None:
    with api_test_client():
        assert app.state.cleanup_task is None
