"""
Date parsing and formatting helpers shared by the aggregation services.

All parsed values are timezone-aware UTC datetimes. Date-only strings
("2025-01-15") are read as midnight UTC.
"""
import math
from datetime import date, datetime, time, timezone
from typing import Optional, Union

DateInput = Union[datetime, date, str, None]

SECONDS_PER_DAY = 24 * 60 * 60


def parse_date(value: DateInput) -> Optional[datetime]:
    """
    Parse a date value into an aware UTC datetime.

    Args:
        value: datetime, date, ISO-8601 string, or None

    Returns:
        Parsed datetime, or None if the value is empty or not a valid date
    """
    if value is None or value == "" or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def is_valid_date(value: DateInput) -> bool:
    return parse_date(value) is not None


def format_date_iso(value: DateInput) -> str:
    """Format as YYYY-MM-DD, or '' when the value does not parse."""
    parsed = parse_date(value)
    return parsed.strftime("%Y-%m-%d") if parsed else ""


def format_month_key(value: DateInput) -> str:
    """Format as zero-padded YYYY-MM."""
    parsed = parse_date(value)
    return f"{parsed.year:04d}-{parsed.month:02d}" if parsed else ""


def format_month_year_short(value: DateInput) -> str:
    """Format as 'Jan 2025'."""
    parsed = parse_date(value)
    return parsed.strftime("%b %Y") if parsed else ""


def format_date_display(value: DateInput) -> str:
    """Format as DD/MM/YYYY."""
    parsed = parse_date(value)
    return parsed.strftime("%d/%m/%Y") if parsed else ""


def days_between(start: datetime, end: datetime) -> int:
    """Whole days between two datetimes, rounding partial days up."""
    seconds = abs((end - start).total_seconds())
    return math.ceil(seconds / SECONDS_PER_DAY)


def shift_months(value: date, months: int) -> date:
    """First day of the month `months` away from `value`'s month."""
    index = value.year * 12 + (value.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def today_utc() -> date:
    return datetime.now(timezone.utc).date()


def to_iso_timestamp(value: datetime) -> str:
    """Format a datetime as an ISO-8601 UTC timestamp with milliseconds ('...000Z')."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
