import os
import random
import time
from pathlib import Path

from fastapi import UploadFile

from gem_finder.core.config import settings
from gem_finder.domain.exceptions import InvalidDataFormat
from gem_finder.utils.logger import get_logger


logger = get_logger("media_storage")

# StaticFiles derives the served content type from the stored suffix
ALLOWED_IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}


class LocalMediaStore:
    """Stores uploaded images in a directory served at ``/uploads``."""

    def __init__(self, upload_dir: str | None = None, url_prefix: str | None = None):
        self.upload_dir = Path(upload_dir or settings.media.upload_dir)
        self.url_prefix = "/" + (url_prefix or settings.media.url_prefix).strip("/")
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    # ------------------------------------------------------------------
    @staticmethod
    def _unique_name(extension: str) -> str:
        suffix = random.randint(0, 10**9)
        return f"{int(time.time() * 1000)}-{suffix}{extension}"

    def save_image(self, file: UploadFile) -> str:
        """Persist an uploaded image and return its storage key.

        The key is relative (``uploads/<name>``) so the public host can change
        without touching stored rows.
        """
        if not (file.content_type or "").startswith("image/"):
            raise InvalidDataFormat("image", "an image/* upload")
        extension = Path(file.filename or "").suffix.lower()
        if extension not in ALLOWED_IMAGE_EXTENSIONS:
            raise InvalidDataFormat(
                "image", "one of " + ", ".join(sorted(ALLOWED_IMAGE_EXTENSIONS))
            )

        content = file.file.read()
        file.file.seek(0)
        if len(content) > settings.media.max_upload_bytes:
            raise InvalidDataFormat(
                "image", f"at most {settings.media.max_upload_bytes} bytes"
            )

        name = self._unique_name(extension)
        (self.upload_dir / name).write_bytes(content)
        logger.info(f"Stored upload {file.filename!r} as {name} ({len(content)} bytes)")
        return f"{self.url_prefix.lstrip('/')}/{name}"

    def delete(self, key: str | None) -> None:
        if not key or key.startswith(("http://", "https://")):
            return
        path = self.upload_dir / os.path.basename(key.replace("\\", "/"))
        if path.exists():
            path.unlink()
            logger.info(f"Removed upload {path.name}")

    def public_url(self, key: str | None) -> str | None:
        """Resolve any stored image reference to one absolute URL.

        Already absolute URLs pass through. Relative keys, ``/uploads/...``
        paths, bare file names and Windows-style ``uploads\\x.jpg`` paths all
        resolve to ``<backend_url>/uploads/<name>``.
        """
        if not key:
            return None
        if key.startswith(("http://", "https://")):
            return key
        name = os.path.basename(key.replace("\\", "/"))
        return f"{settings.backend_url}{self.url_prefix}/{name}"


media_store = LocalMediaStore()
