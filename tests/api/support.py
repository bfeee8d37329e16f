# Shared helpers for API endpoint tests.
# They build TestClient contexts and small multipart payloads so the
# endpoint tests stay focused on behaviour.

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from fastapi.testclient import TestClient

from services_catalog_api.app.main import app
from tests.conftest import ADMIN_PASSWORD

JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00" + b"\x00" * 64
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@contextmanager
def api_test_client(*, logged_in: bool = False) -> Iterator[TestClient]:
    """Yield a TestClient with startup/shutdown events run."""

    with TestClient(app) as client:
        if logged_in:
            response = client.post("/admin/login", json={"password": ADMIN_PASSWORD})
            assert response.status_code == 200
        yield client


def create_service(
    client: TestClient,
    *,
    name: str | None = "Haircut",
    price: str | None = "500",
    description: list[str] | str | None = None,
    photo: tuple[str, bytes, str] | None = ("valid.jpg", JPEG_BYTES, "image/jpeg"),
) -> Any:
    data: dict[str, Any] = {}
    if name is not None:
        data["name"] = name
    if price is not None:
        data["price"] = price
    data["description"] = ["desc"] if description is None else description
    files = {"photo": photo} if photo is not None else None
    return client.post("/services", data=data, files=files)
