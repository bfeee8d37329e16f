"""
Unit tests for the ``hash_admin_password.py`` helper script.
"""

import pytest

import hash_admin_password
from services_catalog_api.app.core.security import verify_password


def test_prints_verifiable_hash(capsys: pytest.CaptureFixture[str]) -> None:
    assert hash_admin_password.main(["--password", "admin-pass"]) == 0

    printed = capsys.readouterr().out.strip()
    assert verify_password("admin-pass", printed)


def test_env_flag_prints_assignment(capsys: pytest.CaptureFixture[str]) -> None:
    assert hash_admin_password.main(["--password", "x", "--env"]) == 0

    printed = capsys.readouterr().out.strip()
    assert printed.startswith("ADMIN_PASSWORD_HASH=")
    assert verify_password("x", printed.split("=", 1)[1])


def test_empty_password_is_refused(capsys: pytest.CaptureFixture[str]) -> None:
    assert hash_admin_password.main(["--password", ""]) == 1
    assert "Empty password" in capsys.readouterr().err


def test_prompt_mismatch_is_refused(monkeypatch: pytest.MonkeyPatch) -> None:
    answers = iter(["one", "two"])
    monkeypatch.setattr(hash_admin_password.getpass, "getpass", lambda prompt="": next(answers))

    assert hash_admin_password.main([]) == 1
