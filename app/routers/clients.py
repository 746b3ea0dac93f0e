# =============================================================================
# app/routers/clients.py - Client Testimonial Endpoints
# =============================================================================
# Same shape as projects, with a required designation and no update.
# inline_router and upload_router are the two image storage variants.
# =============================================================================

import logging
from typing import Annotated, Any

from fastapi import APIRouter, File, Form, UploadFile

from app.dependencies import ImageCodecDep, RecordServiceDep
from core.models.common import DeleteResponse
from core.models.kinds import CLIENTS
from core.models.showcase import ClientCreate, ClientResponse
from core.services.media_service import with_image_url

logger = logging.getLogger(__name__)

inline_router = APIRouter()
upload_router = APIRouter()


def _present(record: dict[str, Any], codec) -> ClientResponse:
    return ClientResponse.model_validate(with_image_url(record, codec))


@inline_router.get("", response_model=list[ClientResponse])
@upload_router.get("", response_model=list[ClientResponse])
async def list_clients(records: RecordServiceDep, codec: ImageCodecDep):
    """List all clients, newest first."""
    return [_present(record, codec) for record in records.list(CLIENTS)]


@inline_router.delete("/{client_id}", response_model=DeleteResponse)
@upload_router.delete("/{client_id}", response_model=DeleteResponse)
async def delete_client(client_id: str, records: RecordServiceDep, codec: ImageCodecDep):
    record = records.delete_by_id(CLIENTS, client_id)
    codec.delete(record.get("image"))
    return DeleteResponse(message="Client deleted successfully")


@inline_router.post("", response_model=ClientResponse, status_code=201)
async def create_client(
    request: ClientCreate,
    records: RecordServiceDep,
    codec: ImageCodecDep,
):
    """Create a client testimonial with an optional inline Base64 photo."""
    logger.info(
        f"Creating client: name={request.name!r}, designation={request.designation!r}, "
        f"image_size={len(request.image_base64 or '')}, image_type={request.image_type}"
    )

    record = records.create(
        CLIENTS,
        {
            "name": request.name,
            "description": request.description,
            "designation": request.designation,
            **codec.encode(request.image_base64, request.image_type),
        },
    )
    return _present(record, codec)


@upload_router.post("", response_model=ClientResponse, status_code=201)
async def create_client_with_upload(
    records: RecordServiceDep,
    codec: ImageCodecDep,
    name: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    designation: Annotated[str | None, Form()] = None,
    image: Annotated[UploadFile | None, File(description="Client photo")] = None,
):
    """Create a client testimonial from a multipart form with a required photo."""
    fields = records.validate(
        CLIENTS,
        {"name": name, "description": description, "designation": designation},
    )
    filename = await codec.save(image)

    try:
        record = records.create(CLIENTS, {**fields, "image": filename})
    except Exception:
        codec.delete(filename)
        raise

    return _present(record, codec)
