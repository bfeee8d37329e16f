"""
Unit tests for catalog business rules that are awkward to reach over HTTP.
"""

import asyncio
from pathlib import Path

import pytest

from services_catalog_api.app.core.errors import NotFoundError, ValidationError
from services_catalog_api.app.services.catalog_service import CatalogService, utc_timestamp
from services_catalog_api.app.services.record_store import RecordStore


def test_delete_reports_404_when_record_vanishes_after_photo_removal(
    monkeypatch: pytest.MonkeyPatch, upload_dir: Path
) -> None:
    (upload_dir / "p.jpg").write_bytes(b"1")
    stored = RecordStore.insert({"name": "x", "photo": "/uploads/p.jpg"})
    monkeypatch.setattr(RecordStore, "remove", lambda record_id: 0)

    with pytest.raises(NotFoundError):
        asyncio.run(CatalogService.delete_service(stored["_id"]))
    # Photo removal already happened; this non-atomicity is accepted.
    assert not (upload_dir / "p.jpg").exists()


def test_validation_failure_discards_given_photo(upload_dir: Path) -> None:
    (upload_dir / "p.jpg").write_bytes(b"1")

    with pytest.raises(ValidationError):
        asyncio.run(
            CatalogService.create_service(name="", price="1", description=["d"], photo_filename="p.jpg")
        )
    assert not (upload_dir / "p.jpg").exists()


def test_created_record_stores_price_as_submitted() -> None:
    stored = asyncio.run(
        CatalogService.create_service(name="n", price="1500.50", description="d")
    )

    assert stored["price"] == "1500.50"
    assert stored["description"] == ["d"]
    assert RecordStore.find_by_id(stored["_id"]) == stored


def test_raw_documents_with_odd_photo_values_delete_cleanly() -> None:
    stored = RecordStore.insert({"photo": ["not", "a", "string"]})

    message = asyncio.run(CatalogService.delete_service(stored["_id"]))

    assert message == "Услуга удалена"


def test_utc_timestamp_format() -> None:
    value = utc_timestamp()
    assert value.endswith("Z")
    assert len(value) == len("2024-01-31T12:00:00.000Z")
