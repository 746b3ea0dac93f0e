# =============================================================================
# app/routers/projects.py - Project Endpoints
# =============================================================================
# Two router variants exist, one per image storage mode:
# - inline_router: JSON bodies with imageBase64/imageType
# - upload_router: multipart bodies with an `image` file part, plus PUT
# main.py mounts exactly one of them. List and delete are shared.
# =============================================================================

import logging
from typing import Annotated, Any

from fastapi import APIRouter, File, Form, UploadFile

from app.dependencies import ImageCodecDep, RecordServiceDep
from app.exceptions import RecordValidationError
from core.models.common import DeleteResponse
from core.models.kinds import PROJECTS
from core.models.showcase import ProjectCreate, ProjectResponse
from core.services.media_service import with_image_url

logger = logging.getLogger(__name__)

inline_router = APIRouter()
upload_router = APIRouter()


def _present(record: dict[str, Any], codec) -> ProjectResponse:
    return ProjectResponse.model_validate(with_image_url(record, codec))


# =============================================================================
# Shared Endpoints
# =============================================================================

@inline_router.get("", response_model=list[ProjectResponse])
@upload_router.get("", response_model=list[ProjectResponse])
async def list_projects(records: RecordServiceDep, codec: ImageCodecDep):
    """List all projects, newest first, each with a derived imageUrl."""
    return [_present(record, codec) for record in records.list(PROJECTS)]


@inline_router.delete("/{project_id}", response_model=DeleteResponse)
@upload_router.delete("/{project_id}", response_model=DeleteResponse)
async def delete_project(project_id: str, records: RecordServiceDep, codec: ImageCodecDep):
    """Delete a project and release its stored image, if any."""
    record = records.delete_by_id(PROJECTS, project_id)
    codec.delete(record.get("image"))
    return DeleteResponse(message="Project deleted successfully")


# =============================================================================
# Inline (Base64) Mode
# =============================================================================

@inline_router.post("", response_model=ProjectResponse, status_code=201)
async def create_project(
    request: ProjectCreate,
    records: RecordServiceDep,
    codec: ImageCodecDep,
):
    """
    Create a project with an optional inline Base64 image.

    A blank imageBase64 creates the project without an image (imageUrl null).
    """
    logger.info(
        f"Creating project: name={request.name!r}, "
        f"description_length={len(request.description or '')}, "
        f"image_size={len(request.image_base64 or '')}, image_type={request.image_type}"
    )

    record = records.create(
        PROJECTS,
        {
            "name": request.name,
            "description": request.description,
            **codec.encode(request.image_base64, request.image_type),
        },
    )
    return _present(record, codec)


# =============================================================================
# Stored-File Mode
# =============================================================================

@upload_router.post("", response_model=ProjectResponse, status_code=201)
async def create_project_with_upload(
    records: RecordServiceDep,
    codec: ImageCodecDep,
    name: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    image: Annotated[UploadFile | None, File(description="Project image")] = None,
):
    """
    Create a project from a multipart form.

    The image file is required and validated before anything is stored.
    """
    fields = records.validate(PROJECTS, {"name": name, "description": description})
    filename = await codec.save(image)

    try:
        record = records.create(PROJECTS, {**fields, "image": filename})
    except Exception:
        codec.delete(filename)
        raise

    return _present(record, codec)


@upload_router.put("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: str,
    records: RecordServiceDep,
    codec: ImageCodecDep,
    name: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    image: Annotated[UploadFile | None, File(description="Replacement image")] = None,
):
    """
    Update a project's name, description and/or image.

    Fields that are not sent keep their stored value. A new image replaces
    the stored file, which is then deleted.
    """
    existing = records.get_by_id(PROJECTS, project_id)

    fields: dict[str, Any] = {}
    if name is not None:
        fields["name"] = name
    if description is not None:
        fields["description"] = description

    new_filename = None
    if image is not None and (image.filename or image.size):
        new_filename = await codec.save(image)
        fields["image"] = new_filename

    if not fields:
        raise RecordValidationError("Nothing to update: send name, description or image")

    try:
        record = records.update(PROJECTS, project_id, fields)
    except Exception:
        if new_filename:
            codec.delete(new_filename)
        raise

    if new_filename:
        codec.delete(existing.get("image"))

    return _present(record, codec)
