"""
Filesystem store for uploaded service photos.

Photos live flat in ``settings.upload_dir`` under generated names of
the form ``{epoch_ms}-{random}{ext}``.  Records reference them as
``/uploads/<filename>``; every operation here only looks at the
basename of what it is given, so a stored reference can never point
outside the upload directory.
"""

from __future__ import annotations

import logging
import random
import time
from pathlib import Path, PurePosixPath
from typing import List, Optional

from starlette.datastructures import UploadFile

from services_catalog_api.app.core.config import settings
from services_catalog_api.app.core.errors import FileTooLargeError, FileTypeError, StorageError

logger = logging.getLogger(__name__)

URL_PREFIX = "/uploads/"

ALLOWED_CONTENT_TYPES = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
}

# Legacy uploads may still carry ".jpeg".
SERVED_MEDIA_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
}


def upload_root() -> Path:
    return Path(settings.upload_dir).expanduser().resolve()


def generate_filename(content_type: str) -> str:
    """Build a collision-resistant name for an accepted content type.

    The extension always comes from ``ALLOWED_CONTENT_TYPES``; the
    client-supplied filename is never trusted.
    """
    ext = ALLOWED_CONTENT_TYPES[content_type]
    unique_suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
    return f"{unique_suffix}{ext}"


def public_path(filename: str) -> str:
    return URL_PREFIX + filename


def media_type_for(filename: str) -> str:
    """Content type to serve a stored file with, never anything executable."""
    suffix = PurePosixPath(filename).suffix.lower()
    return SERVED_MEDIA_TYPES.get(suffix, "application/octet-stream")


class AssetStore:
    """Save, list and delete photo files."""

    @classmethod
    def ensure_root(cls) -> Path:
        root = upload_root()
        root.mkdir(parents=True, exist_ok=True)
        return root

    @classmethod
    async def save(cls, upload: UploadFile) -> str:
        """Validate and write an uploaded photo; returns the stored filename.

        Raises ``FileTypeError`` for anything but JPEG/PNG and
        ``FileTooLargeError`` above ``settings.max_upload_bytes``.
        Nothing is written when validation fails.
        """
        content_type = (upload.content_type or "").split(";")[0].strip().lower()
        if content_type not in ALLOWED_CONTENT_TYPES:
            logger.warning("Rejected upload %r with content type %r", upload.filename, content_type)
            raise FileTypeError()
        limit = settings.max_upload_bytes
        data = await upload.read(limit + 1)
        if len(data) > limit:
            logger.warning("Rejected upload %r larger than %d bytes", upload.filename, limit)
            raise FileTooLargeError()

        filename = generate_filename(content_type)
        try:
            (cls.ensure_root() / filename).write_bytes(data)
        except OSError as e:
            logger.error("Failed to write upload %s: %s", filename, e)
            raise StorageError() from e
        logger.info("Stored upload %s (%d bytes)", filename, len(data))
        return filename

    @classmethod
    def delete(cls, path: str) -> bool:
        """Delete a stored file by name or ``/uploads/...`` path.

        A missing file is not an error and returns ``False``; other
        filesystem errors are logged and also return ``False``.
        """
        name = PurePosixPath(path).name
        if not name or name.startswith("."):
            return False
        try:
            (upload_root() / name).unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.error("Failed to delete file %s: %s", name, e)
            return False
        return True

    @classmethod
    def list_files(cls) -> List[str]:
        """Return names of stored files, skipping directories and dotfiles."""
        root = upload_root()
        if not root.exists():
            return []
        try:
            return sorted(
                entry.name
                for entry in root.iterdir()
                if entry.is_file() and not entry.name.startswith(".")
            )
        except OSError as e:
            logger.error("Failed to read upload directory %s: %s", root, e)
            raise StorageError() from e

    @classmethod
    def path_for(cls, filename: str) -> Optional[Path]:
        """Resolve a stored file for serving; ``None`` if it does not exist."""
        name = PurePosixPath(filename).name
        if not name or name != filename or name.startswith("."):
            return None
        path = upload_root() / name
        if not path.is_file():
            return None
        return path
