"""
Filesystem implementation of the upload port.

Profile images are written under ``<root>/profile`` with a random name that
keeps the original extension, and served from ``<base_url>/uploads/profile``.
"""

import asyncio
import logging
import os
from pathlib import Path
from urllib.parse import quote
from uuid import uuid4

from src.app.services.upload_storage import IUploadStorage

logger = logging.getLogger(__name__)

PROFILE_FOLDER = "profile"


class LocalUploadStorage(IUploadStorage):
    def __init__(self, root: str, base_url: str):
        self.directory = Path(root) / PROFILE_FOLDER
        self.directory.mkdir(parents=True, exist_ok=True)
        self.base_url = base_url.rstrip("/")

    async def store(self, content: bytes, original_filename: str) -> str:
        extension = os.path.splitext(original_filename or "")[1].lower()
        filename = f"{uuid4()}{extension}"
        await asyncio.to_thread(self._write, filename, content)
        logger.debug(f"Stored upload {filename} ({len(content)} bytes)")
        return filename

    async def remove(self, filename: str) -> None:
        await asyncio.to_thread(self._path(filename).unlink, missing_ok=True)
        logger.debug(f"Removed upload {filename}")

    def public_url(self, filename: str) -> str:
        return f"{self.base_url}/uploads/{PROFILE_FOLDER}/{quote(filename)}"

    def _path(self, filename: str) -> Path:
        # Only the final path component is used
        return self.directory / Path(filename).name

    def _write(self, filename: str, content: bytes) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self._path(filename).write_bytes(content)
