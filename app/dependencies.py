# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# The app factory builds one store handle, one RecordService and one image
# codec, keeps them on app.state, and handlers receive them via Depends().
# =============================================================================

import logging
from typing import Annotated

from fastapi import Depends, Request

from app.config import Settings
from core.models.kinds import unique_constraints
from core.services.contact_service import ContactService
from core.services.media_service import InlineImageCodec, StoredImageCodec
from core.services.record_service import RecordService
from lib.record_store import InMemoryRecordStore, RecordStore

logger = logging.getLogger(__name__)


def build_record_store(settings: Settings) -> RecordStore:
    """
    Create the record store selected by STORE_BACKEND.

    The Supabase client is created lazily, so an unreachable database does
    not stop the API from starting; it shows up as "disconnected" instead.
    """
    if settings.store_backend == "supabase":
        if not settings.SUPABASE_URL or not settings.SUPABASE_SERVICE_KEY:
            raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_KEY are required for the supabase backend")

        from lib.supabase_client import SupabaseRecordStore

        return SupabaseRecordStore(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)

    logger.warning("Using in-memory record store; data is lost on restart")
    return InMemoryRecordStore(unique_fields=unique_constraints())


def get_record_service(request: Request) -> RecordService:
    """Get the application's RecordService."""
    return request.app.state.record_service


def get_contact_service(request: Request) -> ContactService:
    return ContactService(request.app.state.record_service)


def get_image_codec(request: Request) -> InlineImageCodec | StoredImageCodec:
    """Get the codec for the deployment's image storage mode."""
    return request.app.state.image_codec


# Type aliases for dependency injection
RecordServiceDep = Annotated[RecordService, Depends(get_record_service)]
ContactServiceDep = Annotated[ContactService, Depends(get_contact_service)]
ImageCodecDep = Annotated[InlineImageCodec | StoredImageCodec, Depends(get_image_codec)]
