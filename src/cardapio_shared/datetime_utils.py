"""
Datetime utilities.
"""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

FALLBACK_TIMEZONE = "America/Sao_Paulo"


def utcnow() -> datetime:
    """
    Get current UTC time (timezone-aware).
    """
    return datetime.now(timezone.utc)


def local_now(tz_name: str | None) -> datetime:
    """Current time in the restaurant's timezone, falling back to São Paulo."""
    try:
        tzinfo = ZoneInfo(tz_name or FALLBACK_TIMEZONE)
    except (ZoneInfoNotFoundError, ValueError):
        tzinfo = ZoneInfo(FALLBACK_TIMEZONE)
    return datetime.now(tzinfo)


def sunday_first_weekday(moment: datetime) -> int:
    """Day of week with 0 = Sunday, as stored in business_hours."""
    return (moment.weekday() + 1) % 7
