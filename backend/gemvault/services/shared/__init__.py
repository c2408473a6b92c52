"""Shared utilities used across services."""

from .date_utils import format_date_for_display, parse_calendar_date, to_iso_date, today_in_zone
from .http_client import HTTPClient, HTTPClientError

__all__ = [
    "HTTPClient",
    "HTTPClientError",
    "format_date_for_display",
    "parse_calendar_date",
    "to_iso_date",
    "today_in_zone",
]
