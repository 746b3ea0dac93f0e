# =============================================================================
# core/models/common.py - Shared Schema Pieces
# =============================================================================
# Records are stored with snake_case columns and exchanged as camelCase JSON
# (createdAt, imageUrl, fullName, ...). Every API model inherits RecordModel
# to get that aliasing.
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RecordModel(BaseModel):
    """Base model with camelCase JSON aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class DeleteResponse(BaseModel):
    """Acknowledgment returned by every DELETE endpoint."""

    message: str = Field(..., examples=["Project deleted successfully"])


class HealthResponse(RecordModel):
    """Liveness plus record store connectivity."""

    status: str
    message: str
    timestamp: str
    database: str = Field(..., description="connected or disconnected")
    image_storage: str = Field(..., description="Active image storage strategy")
