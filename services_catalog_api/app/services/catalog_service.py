"""
Business logic for the services catalog.

Creation keeps the photo file and the record consistent: the photo is
stored first, and every failure after that point (invalid fields,
storage error) deletes it again before the error reaches the client.
Deletion removes the photo before the record; if the record vanished
in between, the caller still gets a 404.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from services_catalog_api.app.core.errors import NotFoundError, StorageError, ValidationError
from services_catalog_api.app.schemas.service import ServiceCreate
from services_catalog_api.app.services.asset_store import AssetStore, public_path
from services_catalog_api.app.services.record_store import RecordStore

logger = logging.getLogger(__name__)

PHOTO_AND_RECORD_DELETED = "Услуга и изображение удалены"
RECORD_DELETED = "Услуга удалена"


def utc_timestamp() -> str:
    """Current UTC time as ``2024-01-31T12:00:00.000Z``."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class CatalogService:
    """Service class for creating, listing and deleting catalog entries."""

    @classmethod
    async def create_service(
        cls,
        name: Optional[str],
        price: Optional[str],
        description: Optional[List[str]],
        photo_filename: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Validate the submitted fields and store a new record.

        ``photo_filename`` is a file already written to the asset store;
        it is removed again if validation or the insert fails.
        """
        try:
            data = ServiceCreate.model_validate(
                {"name": name, "price": price, "description": description}
            )
        except PydanticValidationError as e:
            logger.info("Rejected service: %s", e.errors(include_url=False))
            cls._discard_photo(photo_filename)
            raise ValidationError()

        document = {
            "name": data.name,
            "description": data.description,
            "price": data.price,
            "photo": public_path(photo_filename) if photo_filename else None,
            "createdAt": utc_timestamp(),
        }
        try:
            stored = RecordStore.insert(document)
        except StorageError:
            cls._discard_photo(photo_filename)
            raise
        logger.info("Created service %s (%s)", stored["_id"], data.name)
        return stored

    @classmethod
    async def insert_raw(cls, document: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a document as given, without validation or file handling."""
        try:
            stored = RecordStore.insert(document)
        except StorageError as e:
            raise StorageError("Ошибка добавления", field="error") from e
        logger.info("Inserted raw service document %s", stored["_id"])
        return stored

    @classmethod
    async def list_services(cls) -> List[Dict[str, Any]]:
        try:
            return RecordStore.find_all()
        except StorageError as e:
            raise StorageError("Ошибка получения данных", field="error") from e

    @classmethod
    async def delete_service(cls, service_id: str) -> str:
        """Delete a record and its photo; returns the confirmation message.

        Raises ``NotFoundError`` if the record does not exist or was
        removed concurrently.
        """
        service = RecordStore.find_by_id(service_id)
        if service is None:
            raise NotFoundError()

        photo = service.get("photo")
        has_photo = isinstance(photo, str) and bool(photo)
        if has_photo:
            AssetStore.delete(photo)

        if RecordStore.remove(service_id) == 0:
            raise NotFoundError()
        logger.info("Deleted service %s", service_id)
        return PHOTO_AND_RECORD_DELETED if has_photo else RECORD_DELETED

    @staticmethod
    def _discard_photo(photo_filename: Optional[str]) -> None:
        if photo_filename:
            AssetStore.delete(photo_filename)
