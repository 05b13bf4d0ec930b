"""
UTC-first datetime utilities.

- Internal processing: timezone-aware datetimes in UTC
- Database storage: ISO 8601 strings with microseconds (sortable as TEXT)
- API responses: ISO 8601 strings with 'Z' suffix

Usage:
    from core.datetime_utils import utc_now, format_iso, to_db_string, from_db_string

    now = utc_now()
    stored = to_db_string(now)        # "2024-01-15T05:00:00.123456Z"
    restored = from_db_string(stored)
    format_iso(restored)              # "2024-01-15T05:00:00Z"
"""
import logging
from datetime import datetime, timezone
from typing import Optional, Union

logger = logging.getLogger(__name__)


# =============================================================================
# CORE UTILITIES
# =============================================================================

def utc_now() -> datetime:
    """Get current datetime in UTC with timezone info."""
    return datetime.now(timezone.utc)


def to_utc(dt: datetime) -> datetime:
    """
    Convert a datetime to UTC.

    Naive datetimes are assumed to already be UTC.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


# =============================================================================
# PARSING
# =============================================================================

def parse_datetime(value: Union[str, datetime]) -> datetime:
    """
    Parse a datetime value to a UTC datetime.

    Accepts datetime objects and ISO 8601 strings (with or without offset,
    'Z' suffix allowed).

    Raises:
        ValueError: If the value cannot be parsed.

    Examples:
        >>> parse_datetime("2024-01-15T10:30:00Z")
        datetime.datetime(2024, 1, 15, 10, 30, tzinfo=datetime.timezone.utc)
    """
    if isinstance(value, datetime):
        return to_utc(value)

    if not isinstance(value, str):
        raise ValueError(f"Expected datetime or string, got {type(value).__name__}")

    value = value.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"

    try:
        return to_utc(datetime.fromisoformat(value))
    except ValueError:
        pass

    # SQLite CURRENT_TIMESTAMP format
    try:
        return datetime.strptime(value, "%Y-%m-%d %H:%M:%S").replace(tzinfo=timezone.utc)
    except ValueError:
        raise ValueError(f"Cannot parse datetime: '{value}'")


def parse_datetime_safe(value: Union[str, datetime, None]) -> Optional[datetime]:
    """Parse a datetime, returning None for None or unparseable input."""
    if value is None:
        return None
    try:
        return parse_datetime(value)
    except ValueError as e:
        logger.warning(f"Failed to parse datetime '{value}': {e}")
        return None


# =============================================================================
# FORMATTING
# =============================================================================

def format_iso(dt: datetime) -> str:
    """
    Format datetime to ISO 8601 string with 'Z' suffix.

    Example:
        >>> format_iso(datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc))
        '2024-01-15T10:30:00Z'
    """
    return to_utc(dt).strftime("%Y-%m-%dT%H:%M:%SZ")


# =============================================================================
# DATABASE HELPERS
# =============================================================================

def to_db_string(dt: datetime) -> str:
    """
    Convert datetime to its SQLite TEXT form.

    Microseconds are kept so that "latest record" ordering is stable for
    writes that land within the same second.
    """
    return to_utc(dt).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def from_db_string(value: Optional[str]) -> Optional[datetime]:
    """Parse a datetime string read from SQLite."""
    return parse_datetime_safe(value)
