"""Date and time utility functions."""
from datetime import date, datetime
from typing import Optional

import pytz
from constants import DATE_FORMAT_DISPLAY, DATETIME_FORMAT_DISPLAY


def get_current_utc() -> datetime:
    """
    Get current UTC datetime.

    Returns:
        Current timezone-aware UTC datetime
    """
    return datetime.now(pytz.UTC)


def utc_timestamp() -> datetime:
    """
    Get current UTC time as a naive datetime for storage.

    Timestamp columns hold naive UTC values.

    Returns:
        Current UTC datetime without tzinfo
    """
    return get_current_utc().replace(tzinfo=None)


def convert_to_timezone(
    dt: datetime,
    timezone_str: str = "Asia/Kolkata"
) -> datetime:
    """
    Convert datetime to specific timezone.

    Args:
        dt: Datetime to convert (assumed UTC if naive)
        timezone_str: Target timezone

    Returns:
        Datetime in target timezone
    """
    if dt.tzinfo is None:
        dt = pytz.UTC.localize(dt)

    target_tz = pytz.timezone(timezone_str)
    return dt.astimezone(target_tz)


def format_date_display(
    dt: Optional[date | datetime],
    include_time: bool = False
) -> str:
    """
    Format date for display to operators.

    Args:
        dt: Date or datetime to format
        include_time: Whether to include time

    Returns:
        Formatted date string, or empty string if None
    """
    if dt is None:
        return ""

    if include_time:
        if isinstance(dt, date) and not isinstance(dt, datetime):
            dt = datetime.combine(dt, datetime.min.time())
        return dt.strftime(DATETIME_FORMAT_DISPLAY)
    else:
        if isinstance(dt, datetime):
            dt = dt.date()
        return dt.strftime(DATE_FORMAT_DISPLAY)


def format_local_timestamp(dt: Optional[datetime], timezone_str: str) -> str:
    """
    Format a stored UTC timestamp in the operator's timezone.

    Args:
        dt: Naive UTC timestamp from the database
        timezone_str: Operator timezone name

    Returns:
        Display string, or empty string if None
    """
    if dt is None:
        return ""
    return format_date_display(convert_to_timezone(dt, timezone_str), include_time=True)
