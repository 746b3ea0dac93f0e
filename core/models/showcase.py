# =============================================================================
# core/models/showcase.py - Project and Client Schemas
# =============================================================================
# Projects and client testimonials both carry an image. Depending on the
# deployment's IMAGE_STORAGE_MODE, `image` holds either Base64 text (with
# `imageType`) or a stored filename. `imageUrl` is derived on every read:
# a data URI for inline images, an absolute URL for stored files.
# =============================================================================

from datetime import datetime

from pydantic import Field

from .common import RecordModel


# =============================================================================
# Inline-mode request bodies
# =============================================================================
# Fields are optional here so that missing values reach RecordService and are
# reported together as one VALIDATION_ERROR.

class ProjectCreate(RecordModel):
    """
    JSON body for creating a project with an inline image.

    Example:
        {
            "name": "Skyline Towers",
            "description": "Mixed-use development",
            "imageBase64": "iVBORw0KGgo...",
            "imageType": "image/png"
        }
    """

    name: str | None = None
    description: str | None = None
    image_base64: str | None = None
    image_type: str | None = None


class ClientCreate(ProjectCreate):
    """JSON body for creating a client testimonial with an inline image."""

    designation: str | None = None


# =============================================================================
# Responses
# =============================================================================

class ProjectResponse(RecordModel):
    """A project as returned to clients."""

    id: str = Field(..., description="Opaque record identifier")
    name: str
    description: str
    image: str = Field(default="", description="Base64 data or stored filename")
    image_type: str | None = Field(default=None, description="MIME type of an inline image")
    image_url: str | None = Field(default=None, description="Derived URL usable as <img src>")
    created_at: datetime


class ClientResponse(ProjectResponse):
    """A client testimonial as returned to clients."""

    designation: str
