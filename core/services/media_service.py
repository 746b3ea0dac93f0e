# =============================================================================
# core/services/media_service.py - Image Ingestion and Retrieval
# =============================================================================
# Two image strategies exist; a deployment picks exactly one through
# IMAGE_STORAGE_MODE:
#
# - InlineImageCodec ("inline"): the client sends Base64 text plus a MIME
#   type in the JSON body. Both are stored on the record verbatim and a data
#   URI is synthesized on every read.
#
# - StoredImageCodec ("stored"): the client sends a multipart file. It is
#   validated (extension, content type, size), written to a flat upload
#   directory under a generated name, and the record keeps only the filename.
#
# The two produce different record shapes, so they are never mixed within
# one deployment.
# =============================================================================

import logging
import os
import random
from pathlib import Path
from typing import Any, Protocol

from app.config import Settings
from app.exceptions import (
    ImageTooLargeError,
    MalformedUploadError,
    MissingImageError,
    UnsupportedImageTypeError,
)
from lib.utils import epoch_millis

logger = logging.getLogger(__name__)

# Upper bound (exclusive) of the random part of generated filenames
FILENAME_RANDOM_RANGE = 1_000_000_000


class UploadedFile(Protocol):
    """The parts of an uploaded file the codec needs (matches UploadFile)."""

    filename: str | None
    content_type: str | None

    async def read(self) -> bytes:
        ...


# =============================================================================
# Inline (Base64) Images
# =============================================================================

class InlineImageCodec:
    """
    Stores Base64 image data directly on the record.

    The MIME type is trusted as supplied by the caller; size is bounded by
    the request body ceiling enforced before any handler runs.
    """

    mode = "inline"
    description = "Inline Base64 (stored in the record)"

    def __init__(self, default_type: str = "image/jpeg"):
        self.default_type = default_type

    def encode(self, image_base64: str | None, image_type: str | None) -> dict[str, Any]:
        """
        Turn request fields into record columns.

        Blank or absent data means "no image".

        Example:
            codec.encode("QQ==", "image/png")  # {"image": "QQ==", "image_type": "image/png"}
            codec.encode("  ", None)           # {"image": "", "image_type": None}
        """
        if not image_base64 or not image_base64.strip():
            return {"image": "", "image_type": None}
        return {
            "image": image_base64,
            "image_type": image_type or self.default_type,
        }

    def image_url(self, record: dict[str, Any]) -> str | None:
        """Build a data URI for the record's image, or None when it has none."""
        data = record.get("image")
        if not data:
            return None
        mime_type = record.get("image_type") or self.default_type
        return f"data:{mime_type};base64,{data}"

    def delete(self, filename: str | None) -> bool:
        """Inline images live inside the record; nothing to release."""
        return False


# =============================================================================
# Stored-File Images
# =============================================================================

class StoredImageCodec:
    """
    Writes uploaded images to a flat directory and references them by name.

    Generated names are `<ms timestamp>-<random int><original extension>`.
    Collisions are not re-checked.
    """

    mode = "stored"
    description = "Stored files (served from the upload directory)"

    def __init__(
        self,
        upload_dir: str | Path,
        url_prefix: str,
        base_url: str,
        allowed_extensions: list[str],
        allowed_types: list[str],
        max_size_bytes: int,
    ):
        self.upload_dir = Path(upload_dir)
        self.url_prefix = "/" + url_prefix.strip("/")
        self.base_url = base_url.rstrip("/")
        self.allowed_extensions = [ext.lower() for ext in allowed_extensions]
        self.allowed_types = [mime.lower() for mime in allowed_types]
        self.max_size_bytes = max_size_bytes

    @property
    def max_size_mb(self) -> int:
        return self.max_size_bytes // (1024 * 1024)

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate_type(self, filename: str, content_type: str | None) -> str:
        """
        Check extension first, then the declared content type.

        Returns:
            The original extension (case preserved)

        Raises:
            UnsupportedImageTypeError: If either check fails
        """
        extension = os.path.splitext(filename)[1]
        if extension.lower() not in self.allowed_extensions:
            raise UnsupportedImageTypeError(
                filename,
                reason=f"extension '{extension or '(none)'}' is not allowed",
                allowed=self.allowed_extensions,
            )

        declared = (content_type or "").split(";")[0].strip().lower()
        if declared not in self.allowed_types:
            raise UnsupportedImageTypeError(
                filename,
                reason=f"content type '{declared or '(none)'}' is not allowed",
                allowed=self.allowed_types,
            )
        return extension

    def validate_size(self, size_bytes: int) -> None:
        """
        Raises:
            ImageTooLargeError: If the file exceeds the limit
        """
        if size_bytes > self.max_size_bytes:
            raise ImageTooLargeError(size_bytes / (1024 * 1024), self.max_size_mb)

    # -------------------------------------------------------------------------
    # Storage
    # -------------------------------------------------------------------------

    @staticmethod
    async def _read(upload: UploadedFile) -> bytes:
        try:
            return await upload.read()
        except Exception as e:
            raise MalformedUploadError(str(e))

    @staticmethod
    def generate_filename(extension: str) -> str:
        return f"{epoch_millis()}-{random.randrange(FILENAME_RANDOM_RANGE)}{extension}"

    async def save(self, upload: UploadedFile | None) -> str:
        """
        Validate an uploaded image and write it to the upload directory.

        Args:
            upload: The multipart file part, or None when absent

        Returns:
            Generated filename to store on the record

        Raises:
            MissingImageError: If no file was sent
            MalformedUploadError: If the part has no filename or can't be read
            UnsupportedImageTypeError: If extension or content type is not allowed
            ImageTooLargeError: If the file exceeds the size limit
        """
        if upload is None:
            raise MissingImageError()

        if not upload.filename:
            # Browsers send an empty, unnamed part when no file is chosen
            content = await self._read(upload)
            if not content:
                raise MissingImageError()
            raise MalformedUploadError("file part has no filename")

        extension = self.validate_type(upload.filename, upload.content_type)
        content = await self._read(upload)

        self.validate_size(len(content))

        filename = self.generate_filename(extension)
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        (self.upload_dir / filename).write_bytes(content)

        logger.info(f"Stored image {upload.filename} as {filename} ({len(content)} bytes)")
        return filename

    def delete(self, filename: str | None) -> bool:
        """
        Remove a stored image. External URLs and unknown names are ignored.

        Returns:
            True if a file was deleted
        """
        if not filename or filename.startswith("http"):
            return False
        if os.path.basename(filename) != filename:
            logger.warning(f"Refusing to delete non-flat image path: {filename}")
            return False

        try:
            (self.upload_dir / filename).unlink()
            logger.info(f"Deleted stored image: {filename}")
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.error(f"Failed to delete stored image {filename}: {e}")
            return False

    # -------------------------------------------------------------------------
    # Retrieval
    # -------------------------------------------------------------------------

    def image_url(self, record: dict[str, Any]) -> str | None:
        """
        Absolute URL for the record's image.

        Values that already look like URLs (externally hosted or legacy
        records) are returned unchanged.
        """
        filename = record.get("image")
        if not filename:
            return None
        if filename.startswith("http"):
            return filename
        return f"{self.base_url}{self.url_prefix}/{filename}"


# =============================================================================
# Factory
# =============================================================================

def build_codec(settings: Settings) -> InlineImageCodec | StoredImageCodec:
    """Create the codec for the configured IMAGE_STORAGE_MODE."""
    if settings.IMAGE_STORAGE_MODE == "stored":
        return StoredImageCodec(
            upload_dir=settings.UPLOAD_DIR,
            url_prefix=settings.UPLOAD_URL_PREFIX,
            base_url=settings.PUBLIC_BASE_URL,
            allowed_extensions=settings.allowed_extensions_list,
            allowed_types=settings.allowed_types_list,
            max_size_bytes=settings.max_image_size_bytes,
        )
    return InlineImageCodec(default_type=settings.DEFAULT_IMAGE_TYPE)


def with_image_url(
    record: dict[str, Any], codec: InlineImageCodec | StoredImageCodec
) -> dict[str, Any]:
    """Copy of the record with the derived image_url field added."""
    return {**record, "image_url": codec.image_url(record)}
