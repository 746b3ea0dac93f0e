# =============================================================================
# lib/supabase_client.py - Supabase Record Store
# =============================================================================
# This module implements the RecordStore protocol on top of Supabase tables.
# One client connection is created lazily and reused for every request.
#
# Uniqueness (contacts.email, subscribers.email) is a UNIQUE constraint in
# the database schema (scripts/supabase_schema.sql). PostgREST reports a
# violation with the Postgres code 23505, which is surfaced here as
# StoreConflictError.
#
# Usage:
#   from lib.supabase_client import SupabaseRecordStore
#   store = SupabaseRecordStore(url, service_key)
#   rows = store.list("projects", order_by="created_at")
# =============================================================================

from __future__ import annotations

import logging
import re
from typing import Any

import httpx
from supabase import Client, PostgrestAPIError, create_client

from lib.record_store import StoreConflictError, StoreUnavailableError, RecordStoreError

# Set up logging for this module
logger = logging.getLogger(__name__)

# Postgres error code for unique_violation
UNIQUE_VIOLATION = "23505"

# Table queried by the connectivity probe
PROBE_TABLE = "subscribers"


class SupabaseRecordStore:
    """
    Record store backed by Supabase (PostgREST).

    Example:
        store = SupabaseRecordStore(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)
        store.insert("subscribers", {"id": "...", "email": "a@b.co", "subscribed_at": "..."})
    """

    def __init__(self, url: str, service_key: str, client: Client | None = None):
        self.url = url
        self.service_key = service_key
        self._client = client

    def get_client(self) -> Client:
        """
        Get or create the Supabase client.

        Uses the service_role key which bypasses Row Level Security (RLS).

        Raises:
            StoreUnavailableError: If client creation fails
        """
        if self._client is None:
            try:
                self._client = create_client(self.url, self.service_key)
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise StoreUnavailableError(f"Failed to create Supabase client: {e}")
        return self._client

    def _execute(self, table: str, query) -> list[dict[str, Any]]:
        """Run a query, translating backend errors into store errors."""
        try:
            response = query.execute()
        except PostgrestAPIError as e:
            if e.code == UNIQUE_VIOLATION:
                field = _conflict_field(e.details or e.message or "")
                raise StoreConflictError(table, field, None)
            logger.error(f"Supabase query on {table} failed: {e.message}")
            raise RecordStoreError(f"Query on {table} failed: {e.message}", code=str(e.code))
        except httpx.HTTPError as e:
            logger.error(f"Supabase unreachable: {e}")
            raise StoreUnavailableError(str(e))
        return response.data or []

    # -------------------------------------------------------------------------
    # RecordStore operations
    # -------------------------------------------------------------------------

    def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        client = self.get_client()
        rows = self._execute(table, client.table(table).insert(row))
        if not rows:
            raise RecordStoreError(f"Insert into {table} returned no data")
        return rows[0]

    def list(self, table: str, order_by: str) -> list[dict[str, Any]]:
        client = self.get_client()
        return self._execute(
            table,
            client.table(table).select("*").order(order_by, desc=True),
        )

    def get(self, table: str, record_id: str) -> dict[str, Any] | None:
        client = self.get_client()
        rows = self._execute(
            table,
            client.table(table).select("*").eq("id", record_id).limit(1),
        )
        return rows[0] if rows else None

    def update(
        self, table: str, record_id: str, fields: dict[str, Any]
    ) -> dict[str, Any] | None:
        client = self.get_client()
        rows = self._execute(
            table,
            client.table(table).update(fields).eq("id", record_id),
        )
        return rows[0] if rows else None

    def delete(self, table: str, record_id: str) -> dict[str, Any] | None:
        client = self.get_client()
        rows = self._execute(
            table,
            client.table(table).delete().eq("id", record_id),
        )
        return rows[0] if rows else None

    def is_connected(self) -> bool:
        """Probe the database with a one-row query."""
        try:
            client = self.get_client()
            client.table(PROBE_TABLE).select("id").limit(1).execute()
            return True
        except Exception as e:
            logger.warning(f"Supabase connectivity check failed: {e}")
            return False


def _conflict_field(details: str) -> str:
    """
    Extract the column name from a Postgres unique-violation detail.

    Example: 'Key (email)=(a@b.co) already exists.' -> 'email'
    """
    match = re.search(r"Key \(([^)]+)\)", details)
    return match.group(1) if match else "email"
