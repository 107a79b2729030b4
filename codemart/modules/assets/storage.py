"""Disk storage for uploaded asset archives and preview images."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Protocol

from codemart.core.config import Settings, get_settings
from codemart.modules.common.errors import ValidationFailedError

logger = logging.getLogger(__name__)

ARCHIVE_CONTENT_TYPES = {"application/zip", "application/x-zip-compressed"}
CHUNK_SIZE = 1024 * 1024


class Upload(Protocol):
    """The subset of ``fastapi.UploadFile`` the storage relies on."""

    filename: str | None
    content_type: str | None

    async def read(self, size: int = -1) -> bytes:
        ...

    async def close(self) -> None:
        ...


def is_allowed_content_type(content_type: str | None) -> bool:
    if not content_type:
        return False
    return content_type in ARCHIVE_CONTENT_TYPES or content_type.startswith("image/")


class AssetFileStorage:
    def __init__(self, root: Path, *, public_prefix: str = "/uploads", max_bytes: int = 50 * 1024 * 1024) -> None:
        self.root = root
        self.public_prefix = public_prefix.rstrip("/")
        self.max_bytes = max_bytes

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "AssetFileStorage":
        settings = settings or get_settings()
        return cls(
            Path(settings.upload_storage_dir).resolve(),
            public_prefix=settings.storage.public_prefix,
            max_bytes=settings.storage.max_upload_bytes,
        )

    async def store(self, upload: Upload) -> str:
        """Persist ``upload`` under a random name and return its public URL."""
        if not is_allowed_content_type(upload.content_type):
            await upload.close()
            raise ValidationFailedError("Only zip files and images are allowed")

        self.root.mkdir(parents=True, exist_ok=True)
        file_name = _sanitize_filename(upload.filename) or "upload"
        target_path = self.root / f"{os.urandom(8).hex()}-{file_name}"

        total_size = 0
        try:
            with target_path.open("wb") as buffer:
                while True:
                    chunk = await upload.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    total_size += len(chunk)
                    if total_size > self.max_bytes:
                        break
                    buffer.write(chunk)
        finally:
            await upload.close()

        if total_size > self.max_bytes:
            target_path.unlink(missing_ok=True)
            raise ValidationFailedError("File too large")
        if total_size == 0:
            target_path.unlink(missing_ok=True)
            raise ValidationFailedError("Uploaded file is empty")

        return f"{self.public_prefix}/{target_path.name}"

    def discard(self, url: str | None) -> None:
        """Remove a previously stored file; URLs outside the store are ignored."""
        if not url or not url.startswith(f"{self.public_prefix}/"):
            return
        name = os.path.basename(url)
        path = self.root / name
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Failed to remove stored file %s: %s", path, exc)


def _sanitize_filename(filename: str | None) -> str | None:
    if not filename:
        return None
    name = os.path.basename(filename)
    return name.replace("\0", "").replace(" ", "_").strip()
