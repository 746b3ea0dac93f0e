# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas and record kind descriptors:
# - kinds.py: RecordKind descriptors (table, timestamp, field rules)
# - common.py: camelCase base model, delete and health responses
# - showcase.py: Project and Client schemas (image-bearing records)
# - lead.py: Contact, Subscriber and contact-form schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

from .kinds import (
    CLIENTS,
    CONTACTS,
    PROJECTS,
    RECORD_KINDS,
    SUBSCRIBERS,
    RecordKind,
    unique_constraints,
)
from .common import DeleteResponse, HealthResponse, RecordModel
from .showcase import ClientCreate, ClientResponse, ProjectCreate, ProjectResponse
from .lead import (
    ContactCreate,
    ContactFormData,
    ContactFormRequest,
    ContactFormResponse,
    ContactResponse,
    SubscriberCreate,
    SubscriberResponse,
)

__all__ = [
    # Kinds
    "CLIENTS",
    "CONTACTS",
    "PROJECTS",
    "RECORD_KINDS",
    "SUBSCRIBERS",
    "RecordKind",
    "unique_constraints",
    # Common
    "DeleteResponse",
    "HealthResponse",
    "RecordModel",
    # Showcase
    "ClientCreate",
    "ClientResponse",
    "ProjectCreate",
    "ProjectResponse",
    # Leads
    "ContactCreate",
    "ContactFormData",
    "ContactFormRequest",
    "ContactFormResponse",
    "ContactResponse",
    "SubscriberCreate",
    "SubscriberResponse",
]
