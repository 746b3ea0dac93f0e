# =============================================================================
# core/models/kinds.py - Record Kind Descriptors
# =============================================================================
# Each content kind lives in its own table. A RecordKind describes that table
# and the field rules RecordService applies on create:
# - required_fields: must be present and non-blank
# - trimmed_fields: stored with surrounding whitespace removed
# - lowercase_fields: stored lower-cased (emails, for case-insensitive uniqueness)
# - unique_fields: enforced by the store; conflicts become DuplicateEmailError
# =============================================================================

from dataclasses import dataclass


@dataclass(frozen=True)
class RecordKind:
    """Storage and validation rules for one content kind."""

    label: str
    table: str
    timestamp_field: str
    required_fields: tuple[str, ...]
    trimmed_fields: tuple[str, ...] = ()
    lowercase_fields: tuple[str, ...] = ()
    unique_fields: tuple[str, ...] = ()
    updatable: bool = False
    duplicate_message: str = "Email already exists"


PROJECTS = RecordKind(
    label="Project",
    table="projects",
    timestamp_field="created_at",
    required_fields=("name", "description"),
    trimmed_fields=("name",),
    updatable=True,
)

CLIENTS = RecordKind(
    label="Client",
    table="clients",
    timestamp_field="created_at",
    required_fields=("name", "description", "designation"),
    trimmed_fields=("name", "designation"),
)

CONTACTS = RecordKind(
    label="Contact",
    table="contacts",
    timestamp_field="submitted_at",
    required_fields=("full_name", "email", "mobile_number", "city"),
    trimmed_fields=("full_name", "email", "mobile_number", "city"),
    lowercase_fields=("email",),
    unique_fields=("email",),
    duplicate_message="You have already submitted a contact form with this email",
)

SUBSCRIBERS = RecordKind(
    label="Subscriber",
    table="subscribers",
    timestamp_field="subscribed_at",
    required_fields=("email",),
    trimmed_fields=("email",),
    lowercase_fields=("email",),
    unique_fields=("email",),
    duplicate_message="Email already subscribed",
)

RECORD_KINDS = (PROJECTS, CLIENTS, CONTACTS, SUBSCRIBERS)


def unique_constraints() -> dict[str, tuple[str, ...]]:
    """Unique columns per table, as expected by InMemoryRecordStore."""
    return {kind.table: kind.unique_fields for kind in RECORD_KINDS if kind.unique_fields}
