"""Calendar date helpers for ownership dates.

Ownership dates are calendar dates: no time of day and no timezone. Values
coming back from a database driver or an API may still be full timestamps
(e.g. "2024-01-09T17:00:00.000Z" for a date stored in a UTC+7 zone), so the
date portion is taken from the text whenever it is present and the
timezone-aware conversion is only a fallback.
"""

import re
from datetime import date, datetime
from zoneinfo import ZoneInfo

from gemvault.config import settings

_ISO_DATE_PREFIX = re.compile(r"^(\d{4}-\d{2}-\d{2})")


def parse_calendar_date(value: date | datetime | str | None, tz_name: str | None = None) -> date | None:
    """Reduce a date-like value to a calendar date.

    Args:
        value: date, datetime, ISO-8601 string, or an empty value
        tz_name: Timezone used when a timestamp has to be converted
            (defaults to settings.display_timezone)

    Returns:
        The calendar date, or None for empty values

    Raises:
        ValueError: If a string cannot be interpreted as a date
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        return _to_zone(value, tz_name).date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    match = _ISO_DATE_PREFIX.match(text)
    if match:
        return date.fromisoformat(match.group(1))

    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError as e:
        raise ValueError(f"Invalid date: {value!r}") from e
    return _to_zone(parsed, tz_name).date()


def _to_zone(value: datetime, tz_name: str | None) -> datetime:
    """Convert aware datetimes to the display timezone; naive ones are kept as-is."""
    if value.tzinfo is None:
        return value
    return value.astimezone(ZoneInfo(tz_name or settings.display_timezone))


def to_iso_date(value: date | None) -> str | None:
    """Serialize a calendar date as YYYY-MM-DD."""
    return value.isoformat() if value else None


def format_date_for_display(value: date | None) -> str:
    """Long human-readable form used in validation messages, e.g. '10 January 2024'."""
    if value is None:
        return "-"
    return f"{value.day} {value.strftime('%B %Y')}"


def today_in_zone(tz_name: str | None = None) -> date:
    """Today's calendar date in the display timezone."""
    return datetime.now(ZoneInfo(tz_name or settings.display_timezone)).date()
