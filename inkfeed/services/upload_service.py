"""
Upload service: validates and stores images embedded in article content.
"""

import logging
import uuid
from pathlib import Path

from fastapi import HTTPException, status

logger = logging.getLogger(__name__)

# Stored extension comes from the validated type, never the client filename
IMAGE_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}

ALLOWED_MIME_TYPES = set(IMAGE_EXTENSIONS)

UPLOAD_URL_PREFIX = "/uploads"


class UploadService:
    """Service for storing uploaded images on local disk."""

    def __init__(self, upload_dir: Path, max_bytes: int):
        self.upload_dir = upload_dir
        self.max_bytes = max_bytes

    def ensure_upload_dir(self) -> Path:
        """Ensure uploads directory exists."""
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        return self.upload_dir

    def save_image(self, filename: str | None, content_type: str | None, data: bytes) -> tuple[str, str]:
        """
        Validate and store an image under a random name.

        Args:
            filename: Client-supplied filename, only used for logging
            content_type: Declared MIME type
            data: File bytes

        Returns:
            (url, stored filename)

        Raises:
            HTTPException: 400 for an empty file or unsupported type,
                413 when larger than the configured limit
        """
        if not data:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Please choose an image to upload")

        if content_type not in ALLOWED_MIME_TYPES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Unsupported image format. Upload a JPG, PNG, GIF or WebP image",
            )

        if len(data) > self.max_bytes:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"Image must be at most {self.max_bytes // (1024 * 1024)}MB",
            )

        unique_filename = f"{uuid.uuid4()}{IMAGE_EXTENSIONS[content_type]}"
        file_path = self.ensure_upload_dir() / unique_filename

        try:
            file_path.write_bytes(data)
        except OSError as e:
            logger.error(f"Failed to save upload {unique_filename}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to save file: {e}")

        logger.info(f"Stored upload {filename!r} as {unique_filename}")
        return f"{UPLOAD_URL_PREFIX}/{unique_filename}", unique_filename
