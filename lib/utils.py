# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

import time
from datetime import datetime, timezone
from uuid import UUID


# =============================================================================
# Identifier Utilities
# =============================================================================

def parse_record_id(value: str | UUID) -> str | None:
    """
    Normalize a record identifier to its canonical UUID string.

    Returns None when the value is not a well-formed UUID, so callers can
    treat malformed ids the same as unknown ones.

    Example:
        parse_record_id("550E8400-E29B-41D4-A716-446655440000")  # "550e8400-..."
        parse_record_id("not-an-id")  # None
    """
    if isinstance(value, UUID):
        return str(value)
    try:
        return str(UUID(str(value)))
    except ValueError:
        return None


# =============================================================================
# Clock Utilities
# =============================================================================

def utc_now() -> datetime:
    """Current server time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def epoch_millis() -> int:
    """Milliseconds since the Unix epoch."""
    return int(time.time() * 1000)
