# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable, framework-free building blocks:
# - record_store.py: RecordStore protocol, store errors, in-memory backend
# - supabase_client.py: Supabase-backed RecordStore
# - utils.py: Shared utilities (id parsing, clock helpers)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.record_store import (
    InMemoryRecordStore,
    RecordStore,
    RecordStoreError,
    StoreConflictError,
    StoreUnavailableError,
)
from lib.utils import epoch_millis, parse_record_id, utc_now

__all__ = [
    # Store
    "InMemoryRecordStore",
    "RecordStore",
    "RecordStoreError",
    "StoreConflictError",
    "StoreUnavailableError",
    # Utils
    "epoch_millis",
    "parse_record_id",
    "utc_now",
]
