"""
Disk-backed file storage for uploaded documents.

Stored names are ``<user id>-<epoch ms>-<random><ext>`` so two uploads of
the same original file never collide.
"""

import logging
import os
import random
import time
from pathlib import Path

from app.core.config import settings
from app.core.errors import ValidationError
from app.schemas.document import FileMeta

logger = logging.getLogger(__name__)

MIME_TYPES = {
    ".pdf": "application/pdf",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
}


class LocalFileStorage:
    def __init__(self, root: str = None):
        self.root = root or settings.UPLOAD_DIR

    def validate(self, filename: str, size: int) -> str:
        """Check extension and size; returns the lower-cased extension."""
        ext = Path(filename or "").suffix.lower()
        if ext not in settings.ALLOWED_UPLOAD_EXTENSIONS:
            raise ValidationError("Only PDF, JPEG, JPG, and PNG files are allowed")
        if size > settings.MAX_FILE_SIZE:
            raise ValidationError(
                f"File exceeds maximum size of {settings.MAX_FILE_SIZE // (1024 * 1024)}MB",
                details={"maxFileSize": settings.MAX_FILE_SIZE},
            )
        if size == 0:
            raise ValidationError("No file uploaded")
        return ext

    def save(self, user_id: int, filename: str, content: bytes, content_type: str = None) -> FileMeta:
        ext = self.validate(filename, len(content))

        # Ensure upload directory exists
        os.makedirs(self.root, exist_ok=True)

        stored_name = f"{user_id}-{int(time.time() * 1000)}-{random.randint(0, 10 ** 9)}{ext}"
        file_path = os.path.join(self.root, stored_name)
        with open(file_path, "wb") as buffer:
            buffer.write(content)

        return FileMeta(
            file_name=stored_name,
            file_path=file_path,
            file_size=len(content),
            mime_type=content_type or MIME_TYPES[ext],
        )

    def delete(self, file_path: str) -> None:
        try:
            os.remove(file_path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not remove stored file {file_path}: {e}")


file_storage = LocalFileStorage()
