"""
Local file storage for uploaded images.

Package cover/gallery images and story images are uploaded once through
``POST /uploads``; the returned references are then sent as plain
strings in JSON payloads.  Files are written to ``settings.upload_dir``
and served by the ``StaticFiles`` mount under ``/uploads``.
"""

import logging
import os
import shutil
import time
from pathlib import Path

from fastapi import UploadFile

from .config import settings


logger = logging.getLogger(__name__)


class FileStorage:
    """Store uploads on disk and hand back a public reference."""

    def __init__(self, directory: str | None = None, url_prefix: str = "uploads"):
        self.directory = Path(directory or settings.upload_dir)
        self.url_prefix = url_prefix.strip("/")

    def ensure_directory(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)

    def store(self, upload: UploadFile) -> str:
        """Persist ``upload`` and return ``uploads/<timestamp>-<name>``."""
        self.ensure_directory()
        # Drop any client‑supplied directory components.
        basename = os.path.basename(upload.filename or "") or "upload"
        filename = f"{int(time.time() * 1000)}-{basename}"
        target = self.directory / filename
        with target.open("wb") as out:
            shutil.copyfileobj(upload.file, out)
        logger.info("Stored upload %s (%s)", filename, upload.content_type)
        return f"{self.url_prefix}/{filename}"


def get_storage() -> FileStorage:
    return FileStorage()
