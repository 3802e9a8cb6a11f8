"""Datetime utilities for timezone-aware UTC timestamps.

Usage:
    from src.utils.datetime_utils import utc_now, format_timestamp

    # For SQLAlchemy Column defaults
    created_at = Column(DateTime, default=utc_now)

    # For table display
    format_timestamp(recipe.created_at)  # "19 Oct 2026 14:30"
"""

from datetime import datetime, timezone
from typing import Optional

DISPLAY_FORMAT = "%d %b %Y %H:%M"


def utc_now() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


def format_timestamp(value: Optional[datetime], fmt: str = DISPLAY_FORMAT) -> str:
    """
    Format a stored timestamp for display.

    SQLite returns naive datetimes; they are treated as UTC.

    Args:
        value: Datetime to format (None yields an empty string)
        fmt: strftime format

    Returns:
        Formatted string
    """
    if value is None:
        return ""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.strftime(fmt)
