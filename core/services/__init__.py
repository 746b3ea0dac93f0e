# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .record_service import RecordService
from .media_service import InlineImageCodec, StoredImageCodec, build_codec, with_image_url
from .contact_service import ContactService, normalize_mobile

__all__ = [
    "RecordService",
    "InlineImageCodec",
    "StoredImageCodec",
    "build_codec",
    "with_image_url",
    "ContactService",
    "normalize_mobile",
]
