"""
Durable document store for service records.

Each record is a JSON document stored in the ``services`` table and
identified by its ``_id`` field.  ``insert`` generates an ``_id`` when
the document has none.  Every call runs in its own connection and
transaction, so each call is atomic for the one document it touches.
Any ``sqlite3.Error`` is re-raised as ``StorageError``; endpoints turn
that into HTTP 500.
"""

from __future__ import annotations

import json
import logging
import sqlite3
import uuid
from typing import Any, Dict, List, Optional

from services_catalog_api.app.core.db import get_connection
from services_catalog_api.app.core.errors import StorageError

logger = logging.getLogger(__name__)

Document = Dict[str, Any]


def generate_id() -> str:
    return uuid.uuid4().hex


class RecordStore:
    """Insert, query and remove service documents."""

    @classmethod
    def insert(cls, doc: Document) -> Document:
        """Store a copy of ``doc`` and return it with its ``_id``.

        A caller-supplied ``_id`` is kept; inserting a duplicate ``_id``
        fails with ``StorageError``.
        """
        stored = dict(doc)
        if not stored.get("_id"):
            stored["_id"] = generate_id()
        record_id = str(stored["_id"])
        try:
            payload = json.dumps(stored, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise StorageError() from e
        try:
            conn = get_connection()
            try:
                conn.execute(
                    "INSERT INTO services (id, document) VALUES (?, ?)",
                    (record_id, payload),
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error("Failed to insert service %s: %s", record_id, e)
            raise StorageError() from e
        return stored

    @classmethod
    def find_all(cls) -> List[Document]:
        """Return every document in insertion order."""
        try:
            conn = get_connection()
            try:
                rows = conn.execute("SELECT document FROM services ORDER BY seq ASC").fetchall()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error("Failed to list services: %s", e)
            raise StorageError() from e
        return [json.loads(row["document"]) for row in rows]

    @classmethod
    def find_by_id(cls, record_id: str) -> Optional[Document]:
        try:
            conn = get_connection()
            try:
                row = conn.execute(
                    "SELECT document FROM services WHERE id = ?",
                    (record_id,),
                ).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error("Failed to load service %s: %s", record_id, e)
            raise StorageError() from e
        if not row:
            return None
        return json.loads(row["document"])

    @classmethod
    def remove(cls, record_id: str) -> int:
        """Delete a document; returns the number of removed rows (0 or 1)."""
        try:
            conn = get_connection()
            try:
                cursor = conn.execute("DELETE FROM services WHERE id = ?", (record_id,))
                removed = cursor.rowcount
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error("Failed to remove service %s: %s", record_id, e)
            raise StorageError() from e
        return removed
