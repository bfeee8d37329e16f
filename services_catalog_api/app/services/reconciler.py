"""
Periodic cleanup of orphaned photo files.

A photo becomes orphaned when no service record references it, e.g.
after a crash between writing the file and inserting the record.  The
sweep compares the upload directory with the ``photo`` fields of all
records and deletes everything unreferenced.  It runs once at startup
and then every ``settings.cleanup_interval_hours``.

Deletions racing with ``DELETE /services/{id}`` are harmless: both
sides treat a missing file as already deleted.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import PurePosixPath
from typing import Any, Iterable, List, Mapping, Set

from services_catalog_api.app.core.config import settings
from services_catalog_api.app.core.errors import StorageError
from services_catalog_api.app.services.asset_store import AssetStore
from services_catalog_api.app.services.record_store import RecordStore

logger = logging.getLogger(__name__)


def referenced_filenames(records: Iterable[Mapping[str, Any]]) -> Set[str]:
    """Basenames of every non-empty ``photo`` reference."""
    names: Set[str] = set()
    for record in records:
        photo = record.get("photo")
        if isinstance(photo, str) and photo:
            names.add(PurePosixPath(photo).name)
    return names


def find_orphaned_files(files: Iterable[str], referenced: Set[str]) -> List[str]:
    return [name for name in files if name not in referenced]


def sweep() -> List[str]:
    """Delete unreferenced files and return the names actually removed.

    If either listing fails the sweep is abandoned without deleting
    anything.
    """
    try:
        files = AssetStore.list_files()
        records = RecordStore.find_all()
    except StorageError:
        logger.error("Orphan cleanup aborted: could not list files or records")
        return []

    deleted: List[str] = []
    for name in find_orphaned_files(files, referenced_filenames(records)):
        if AssetStore.delete(name):
            logger.info("Deleted orphaned file %s", name)
            deleted.append(name)
    return deleted


async def run_periodically(interval_seconds: float | None = None) -> None:
    """Run ``sweep`` now and then forever at a fixed interval.

    Intended to be started as a background task and cancelled on
    shutdown.
    """
    if interval_seconds is None:
        interval_seconds = settings.cleanup_interval_hours * 3600
    while True:
        try:
            await asyncio.to_thread(sweep)
        except Exception:
            logger.exception("Orphan cleanup failed")
        await asyncio.sleep(interval_seconds)
