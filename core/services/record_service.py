# =============================================================================
# core/services/record_service.py - Record CRUD Business Logic
# =============================================================================
# Uniform create/list/get/delete/update for every RecordKind.
# Separates HTTP concerns from database/business logic and translates store
# errors into the API's error taxonomy.
# =============================================================================

import logging
from typing import Any
from uuid import uuid4

from app.exceptions import (
    DuplicateEmailError,
    RecordNotFoundError,
    RecordValidationError,
    StorageUnavailableError,
)
from core.models.kinds import RecordKind
from lib.record_store import RecordStore, StoreConflictError, StoreUnavailableError
from lib.utils import parse_record_id, utc_now

logger = logging.getLogger(__name__)


class RecordService:
    """
    Service for record management operations.

    Holds an explicit store handle; one instance is created per application
    and injected into route handlers.
    """

    def __init__(self, store: RecordStore):
        self.store = store

    def is_connected(self) -> bool:
        """Whether the underlying store is reachable."""
        return self.store.is_connected()

    # -------------------------------------------------------------------------
    # Field preparation
    # -------------------------------------------------------------------------

    @staticmethod
    def _prepare(kind: RecordKind, fields: dict[str, Any]) -> dict[str, Any]:
        """Apply trimming and lower-casing rules."""
        prepared = dict(fields)
        for name in kind.trimmed_fields:
            if isinstance(prepared.get(name), str):
                prepared[name] = prepared[name].strip()
        for name in kind.lowercase_fields:
            if isinstance(prepared.get(name), str):
                prepared[name] = prepared[name].lower()
        return prepared

    @staticmethod
    def _missing(kind: RecordKind, fields: dict[str, Any]) -> list[str]:
        missing = []
        for name in kind.required_fields:
            value = fields.get(name)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(name)
        return missing

    def validate(self, kind: RecordKind, fields: dict[str, Any]) -> dict[str, Any]:
        """
        Prepare fields and check the required ones.

        Returns:
            The prepared (trimmed, lower-cased) fields

        Raises:
            RecordValidationError: If required fields are missing or blank
        """
        prepared = self._prepare(kind, fields)
        missing = self._missing(kind, prepared)
        if missing:
            raise RecordValidationError(
                f"{kind.label} is missing required fields: {', '.join(missing)}",
                fields=missing,
            )
        return prepared

    def _require_id(self, kind: RecordKind, record_id: str) -> str:
        parsed = parse_record_id(record_id)
        if parsed is None:
            raise RecordNotFoundError(kind.label, str(record_id))
        return parsed

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def create(self, kind: RecordKind, fields: dict[str, Any]) -> dict[str, Any]:
        """
        Create a record.

        Args:
            kind: Which table and field rules to use
            fields: Column values (snake_case)

        Returns:
            The stored record, including id and timestamp

        Raises:
            RecordValidationError: If required fields are missing or blank
            DuplicateEmailError: If a unique email already exists
            StorageUnavailableError: If the store cannot be reached
        """
        prepared = self.validate(kind, fields)

        row = {
            **prepared,
            "id": str(uuid4()),
            kind.timestamp_field: utc_now().isoformat(),
        }

        try:
            record = self.store.insert(kind.table, row)
        except StoreConflictError as e:
            raise DuplicateEmailError(
                kind.duplicate_message, email=str(prepared.get(e.field, ""))
            )
        except StoreUnavailableError as e:
            raise StorageUnavailableError(str(e))

        logger.info(f"Created {kind.table} record: {record['id']}")
        return record

    def list(self, kind: RecordKind) -> list[dict[str, Any]]:
        """All records of a kind, newest first."""
        try:
            return self.store.list(kind.table, order_by=kind.timestamp_field)
        except StoreUnavailableError as e:
            raise StorageUnavailableError(str(e))

    def get_by_id(self, kind: RecordKind, record_id: str) -> dict[str, Any]:
        """
        Get a record by ID.

        Raises:
            RecordNotFoundError: If the id is malformed or unknown
        """
        parsed = self._require_id(kind, record_id)
        try:
            record = self.store.get(kind.table, parsed)
        except StoreUnavailableError as e:
            raise StorageUnavailableError(str(e))

        if record is None:
            raise RecordNotFoundError(kind.label, parsed)
        return record

    def delete_by_id(self, kind: RecordKind, record_id: str) -> dict[str, Any]:
        """
        Delete a record by ID.

        Returns:
            The deleted record, so callers can release attached resources

        Raises:
            RecordNotFoundError: If the id is malformed or unknown
        """
        parsed = self._require_id(kind, record_id)
        try:
            record = self.store.delete(kind.table, parsed)
        except StoreUnavailableError as e:
            raise StorageUnavailableError(str(e))

        if record is None:
            raise RecordNotFoundError(kind.label, parsed)

        logger.info(f"Deleted {kind.table} record: {parsed}")
        return record

    def update(self, kind: RecordKind, record_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        """
        Replace fields on an existing record.

        Required fields that are supplied must be non-blank; fields that are
        not supplied keep their stored value.

        Raises:
            RecordValidationError: If the kind is not updatable or a field is blank
            RecordNotFoundError: If the id is malformed or unknown
        """
        if not kind.updatable:
            raise RecordValidationError(f"{kind.label} records cannot be updated")

        parsed = self._require_id(kind, record_id)
        prepared = self._prepare(kind, fields)

        blank = [name for name in self._missing(kind, prepared) if name in prepared]
        if blank:
            raise RecordValidationError(
                f"{kind.label} fields cannot be blank: {', '.join(blank)}",
                fields=blank,
            )

        try:
            record = self.store.update(kind.table, parsed, prepared)
        except StoreUnavailableError as e:
            raise StorageUnavailableError(str(e))

        if record is None:
            raise RecordNotFoundError(kind.label, parsed)

        logger.info(f"Updated {kind.table} record: {parsed}")
        return record
