# =============================================================================
# lib/record_store.py - Record Store Protocol and In-Memory Backend
# =============================================================================
# Defines the operations the API needs from the document store and ships an
# in-memory implementation for development and tests.
#
# Records are plain dicts keyed by table name. Each backend enforces the
# unique columns it was configured with and reports conflicts as
# StoreConflictError, so callers never need a check-then-insert sequence.
#
# Usage:
#   store = InMemoryRecordStore(unique_fields={"subscribers": ("email",)})
#   store.insert("subscribers", {"id": "...", "email": "a@b.co", ...})
# =============================================================================

from __future__ import annotations

import copy
import logging
import threading
from typing import Any, Protocol

logger = logging.getLogger(__name__)


# =============================================================================
# Store Errors
# =============================================================================

class RecordStoreError(Exception):
    """Base error for record store backends."""

    def __init__(self, message: str, code: str = "STORE_ERROR"):
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class StoreConflictError(RecordStoreError):
    """A unique column already holds the inserted value."""

    def __init__(self, table: str, field: str, value: Any):
        super().__init__(
            f"Duplicate value for {table}.{field}: {value}",
            code="UNIQUE_VIOLATION",
        )
        self.table = table
        self.field = field
        self.value = value


class StoreUnavailableError(RecordStoreError):
    """The backend could not be reached."""

    def __init__(self, message: str):
        super().__init__(message, code="STORE_UNAVAILABLE")


# =============================================================================
# Protocol
# =============================================================================

class RecordStore(Protocol):
    """Defines the operations the API needs from the record store."""

    def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        ...

    def list(self, table: str, order_by: str) -> list[dict[str, Any]]:
        ...

    def get(self, table: str, record_id: str) -> dict[str, Any] | None:
        ...

    def update(
        self, table: str, record_id: str, fields: dict[str, Any]
    ) -> dict[str, Any] | None:
        ...

    def delete(self, table: str, record_id: str) -> dict[str, Any] | None:
        ...

    def is_connected(self) -> bool:
        ...


# =============================================================================
# In-Memory Backend
# =============================================================================

class InMemoryRecordStore:
    """
    Thread-safe in-memory record store.

    Unique columns are checked and written under one lock, so two concurrent
    inserts with the same value can never both succeed.

    Set `connected = False` to simulate an unreachable backend: every
    operation then raises StoreUnavailableError.
    """

    def __init__(self, unique_fields: dict[str, tuple[str, ...]] | None = None):
        self.unique_fields = unique_fields or {}
        self.connected = True
        self._tables: dict[str, dict[str, dict[str, Any]]] = {}
        self._sequence: dict[str, int] = {}
        self._next_seq = 0
        self._lock = threading.Lock()

    def _check_connected(self) -> None:
        if not self.connected:
            raise StoreUnavailableError("In-memory store is marked disconnected")

    def _table(self, table: str) -> dict[str, dict[str, Any]]:
        return self._tables.setdefault(table, {})

    def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        self._check_connected()
        with self._lock:
            rows = self._table(table)
            for field in self.unique_fields.get(table, ()):
                value = row.get(field)
                if value is not None and any(r.get(field) == value for r in rows.values()):
                    raise StoreConflictError(table, field, value)

            rows[row["id"]] = copy.deepcopy(row)
            self._sequence[row["id"]] = self._next_seq
            self._next_seq += 1

        logger.debug(f"Inserted {table}/{row['id']}")
        return copy.deepcopy(row)

    def list(self, table: str, order_by: str) -> list[dict[str, Any]]:
        self._check_connected()
        with self._lock:
            rows = list(self._table(table).values())
            # Insertion order breaks timestamp ties
            rows.sort(
                key=lambda r: (r.get(order_by) or "", self._sequence[r["id"]]),
                reverse=True,
            )
            return copy.deepcopy(rows)

    def get(self, table: str, record_id: str) -> dict[str, Any] | None:
        self._check_connected()
        with self._lock:
            row = self._table(table).get(record_id)
            return copy.deepcopy(row) if row is not None else None

    def update(
        self, table: str, record_id: str, fields: dict[str, Any]
    ) -> dict[str, Any] | None:
        self._check_connected()
        with self._lock:
            rows = self._table(table)
            row = rows.get(record_id)
            if row is None:
                return None
            for field in self.unique_fields.get(table, ()):
                value = fields.get(field)
                if value is not None and any(
                    r.get(field) == value for rid, r in rows.items() if rid != record_id
                ):
                    raise StoreConflictError(table, field, value)
            row.update(copy.deepcopy(fields))
            return copy.deepcopy(row)

    def delete(self, table: str, record_id: str) -> dict[str, Any] | None:
        self._check_connected()
        with self._lock:
            row = self._table(table).pop(record_id, None)
            self._sequence.pop(record_id, None)
        if row is not None:
            logger.debug(f"Deleted {table}/{record_id}")
        return row

    def is_connected(self) -> bool:
        return self.connected

    def count(self, table: str) -> int:
        """Number of rows in a table."""
        with self._lock:
            return len(self._table(table))
