"""
Image uploads stored on local disk.

Files are validated by extension and content type, size limited, and
written as ``<directory>/<subdir>/<milliseconds><ext>``. The public path
returned to clients is served by the ``/uploads`` static mount.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Iterable, Optional

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from educenter.core.logging_config import get_logger
from educenter.server.core.config import settings
from educenter.server.core.constant import UPLOADS_URL_PREFIX
from educenter.server.core.errors import UploadRejectedError

logger = get_logger(__name__)

IMAGE_CONTENT_TYPES = {
    ".jpeg": "image/jpeg",
    ".jpg": "image/jpeg",
    ".png": "image/png",
}


class ImageUploadStorage:
    """Validates and stores uploaded images under a root directory."""

    def __init__(self, directory: str | Path, max_bytes: int, allowed_extensions: Iterable[str]) -> None:
        self.directory = Path(directory)
        self.max_bytes = max_bytes
        self.allowed_extensions = {ext.lower() for ext in allowed_extensions}

    def ensure_directory(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)

    def _validate_type(self, file: UploadFile) -> str:
        ext = Path(file.filename or "").suffix.lower()
        content_type = (file.content_type or "").lower()
        if ext not in self.allowed_extensions or IMAGE_CONTENT_TYPES.get(ext) != content_type:
            raise UploadRejectedError("Only images are allowed!")
        return ext

    def _write(self, subdir: str, ext: str, content: bytes) -> Path:
        folder = self.directory / subdir if subdir else self.directory
        folder.mkdir(parents=True, exist_ok=True)
        stamp = int(time.time() * 1000)
        while True:
            target = folder / f"{stamp}{ext}"
            try:
                with open(target, "xb") as handle:
                    handle.write(content)
                return target
            except FileExistsError:
                stamp += 1

    async def save(self, file: UploadFile, subdir: str = "") -> str:
        """Store an uploaded image.

        Args:
            file: Multipart file from the request
            subdir: Folder under the upload root (e.g. ``fan``)

        Returns:
            Public URL path such as ``/uploads/fan/1700000000000.png``

        Raises:
            UploadRejectedError: Wrong file type or file too large
        """
        ext = self._validate_type(file)
        content = await file.read(self.max_bytes + 1)
        if len(content) > self.max_bytes:
            raise UploadRejectedError("File is too large")

        target = await run_in_threadpool(self._write, subdir, ext, content)
        logger.info(f"Stored upload {target} ({len(content)} bytes)")
        return f"{UPLOADS_URL_PREFIX}/{target.relative_to(self.directory).as_posix()}"

    def delete(self, url: Optional[str]) -> bool:
        """Remove a previously stored file given its public path.

        Paths outside the upload root are ignored.
        """
        prefix = f"{UPLOADS_URL_PREFIX}/"
        if not url or not url.startswith(prefix):
            return False
        root = self.directory.resolve()
        path = (root / url[len(prefix):]).resolve()
        if root not in path.parents or not path.is_file():
            return False
        path.unlink()
        logger.info(f"Deleted upload {path}")
        return True


_storage: Optional[ImageUploadStorage] = None


def get_upload_storage() -> ImageUploadStorage:
    """FastAPI dependency returning the process-wide upload storage."""
    global _storage
    if _storage is None:
        upload = settings.upload
        _storage = ImageUploadStorage(upload.directory, upload.max_bytes, upload.allowed_extensions)
    return _storage
