"""
Unit tests for the photo asset store.
"""

import asyncio
import io
import re
from pathlib import Path

import pytest
from starlette.datastructures import Headers, UploadFile

from services_catalog_api.app.core.config import settings
from services_catalog_api.app.core.errors import FileTooLargeError, FileTypeError
from services_catalog_api.app.services.asset_store import (
    AssetStore,
    generate_filename,
    media_type_for,
    public_path,
)


def _upload(data: bytes, filename: str, content_type: str) -> UploadFile:
    return UploadFile(
        file=io.BytesIO(data),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


def test_generate_filename_uses_content_type_extension() -> None:
    assert re.fullmatch(r"\d{13}-\d{1,10}\.jpg", generate_filename("image/jpeg"))
    assert generate_filename("image/png").endswith(".png")


def test_save_ignores_client_extension(upload_dir: Path) -> None:
    filename = asyncio.run(AssetStore.save(_upload(b"<svg/>", "evil.svg", "image/png")))

    assert filename.endswith(".png")
    assert (upload_dir / filename).read_bytes() == b"<svg/>"


@pytest.mark.parametrize(
    "filename, expected",
    [
        ("a.jpg", "image/jpeg"),
        ("a.JPEG", "image/jpeg"),
        ("a.png", "image/png"),
        ("a.html", "application/octet-stream"),
        ("noext", "application/octet-stream"),
    ],
)
def test_media_type_for(filename: str, expected: str) -> None:
    assert media_type_for(filename) == expected


def test_generated_filenames_do_not_collide() -> None:
    names = {generate_filename("image/jpeg") for _ in range(50)}
    assert len(names) == 50


def test_save_writes_file(upload_dir: Path) -> None:
    filename = asyncio.run(AssetStore.save(_upload(b"png-bytes", "a.png", "image/png")))

    assert (upload_dir / filename).read_bytes() == b"png-bytes"
    assert public_path(filename) == f"/uploads/{filename}"


def test_save_rejects_other_content_types(upload_dir: Path) -> None:
    with pytest.raises(FileTypeError):
        asyncio.run(AssetStore.save(_upload(b"%PDF", "a.pdf", "application/pdf")))
    assert list(upload_dir.iterdir()) == []


def test_save_rejects_files_over_limit(monkeypatch: pytest.MonkeyPatch, upload_dir: Path) -> None:
    monkeypatch.setattr(settings, "max_upload_bytes", 4)
    with pytest.raises(FileTooLargeError):
        asyncio.run(AssetStore.save(_upload(b"12345", "a.jpg", "image/jpeg")))
    assert list(upload_dir.iterdir()) == []


def test_save_accepts_file_at_limit(monkeypatch: pytest.MonkeyPatch, upload_dir: Path) -> None:
    monkeypatch.setattr(settings, "max_upload_bytes", 4)
    filename = asyncio.run(AssetStore.save(_upload(b"1234", "a.jpg", "image/jpeg")))
    assert (upload_dir / filename).exists()


def test_delete_accepts_public_path_and_is_idempotent(upload_dir: Path) -> None:
    (upload_dir / "x.jpg").write_bytes(b"1")

    assert AssetStore.delete("/uploads/x.jpg") is True
    assert AssetStore.delete("/uploads/x.jpg") is False
    assert AssetStore.delete("x.jpg") is False


def test_delete_never_leaves_upload_dir(tmp_path: Path, upload_dir: Path) -> None:
    outside = tmp_path / "outside.jpg"
    outside.write_bytes(b"1")
    (upload_dir / "outside.jpg").write_bytes(b"2")

    assert AssetStore.delete("../outside.jpg") is True
    assert outside.exists()
    assert not (upload_dir / "outside.jpg").exists()


def test_list_files_skips_directories_and_dotfiles(upload_dir: Path) -> None:
    (upload_dir / "b.jpg").write_bytes(b"1")
    (upload_dir / "a.png").write_bytes(b"1")
    (upload_dir / ".gitkeep").write_bytes(b"")
    (upload_dir / "nested").mkdir()

    assert AssetStore.list_files() == ["a.png", "b.jpg"]


def test_path_for_rejects_traversal_and_missing(upload_dir: Path) -> None:
    (upload_dir / "a.jpg").write_bytes(b"1")

    assert AssetStore.path_for("a.jpg") == (upload_dir / "a.jpg").resolve()
    assert AssetStore.path_for("../services.db") is None
    assert AssetStore.path_for("missing.jpg") is None
