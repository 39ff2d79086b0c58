"""
Local filesystem media storage.
"""

import asyncio
import mimetypes
import uuid
from pathlib import Path
from typing import Optional

from repairconnect.application.interfaces.gateways import MediaStorageInterface
from repairconnect.config.logging import get_logger
from repairconnect.config.settings import settings
from repairconnect.domain.exceptions.validation_error import ValidationError

logger = get_logger(__name__)

ALLOWED_CONTENT_TYPES = {
    "image/jpeg",
    "image/png",
    "image/gif",
    "image/webp",
}


class LocalMediaStorage(MediaStorageInterface):
    """Writes uploads under MEDIA_ROOT and returns their public path."""

    def __init__(self, root: str = None, url_prefix: str = None, max_bytes: int = None):
        self.root = Path(root or settings.MEDIA_ROOT)
        self.url_prefix = (url_prefix or settings.MEDIA_URL_PREFIX).rstrip("/")
        self.max_bytes = max_bytes or settings.MEDIA_MAX_BYTES

    async def store(self, data: bytes, content_type: Optional[str] = None) -> str:
        if not data:
            raise ValidationError("Upload is empty", {"field": "file"})
        if len(data) > self.max_bytes:
            raise ValidationError(
                "Upload is too large",
                {"field": "file", "max_bytes": self.max_bytes, "size": len(data)},
            )

        content_type = (content_type or "").split(";")[0].strip().lower()
        if content_type not in ALLOWED_CONTENT_TYPES:
            raise ValidationError(
                "Only image uploads are accepted",
                {"field": "file", "allowed": sorted(ALLOWED_CONTENT_TYPES)},
            )

        extension = mimetypes.guess_extension(content_type) or ".bin"
        filename = f"{uuid.uuid4().hex}{extension}"
        await asyncio.to_thread(self._write, filename, data)

        logger.info("Media stored", filename=filename, size=len(data))
        return f"{self.url_prefix}/{filename}"

    def _write(self, filename: str, data: bytes) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        (self.root / filename).write_bytes(data)
