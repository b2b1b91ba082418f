"""Utility for parsing and displaying article publication dates."""

import datetime
from typing import Optional

from dateutil import parser

# Display format for a parsed publication date, e.g. "Aug 17, 2025, 09:30 AM".
DISPLAY_FORMAT = "%b %d, %Y, %I:%M %p"


def parse_published_at(date_str: Optional[str]) -> Optional[datetime.datetime]:
    """Parse a `publishedAt` value into a timezone-aware datetime object (UTC).

    The news API sends ISO 8601 timestamps such as "2025-08-17T09:30:00Z".
    Values that are not ISO 8601 are rejected rather than guessed at.

    Args:
        date_str: The date string to parse.

    Returns:
        A timezone-aware datetime object (UTC) or None if parsing fails.
    """
    if not date_str:
        return None

    try:
        parsed_date = parser.isoparse(date_str)
    except (ValueError, OverflowError):
        return None

    # If parsed date is naive, assume UTC
    if parsed_date.tzinfo is None:
        parsed_date = parsed_date.replace(tzinfo=datetime.timezone.utc)
    return parsed_date.astimezone(datetime.timezone.utc)


def format_published_at(date_str: str) -> str:
    """Format a `publishedAt` value for display, falling back to the raw string."""
    parsed_date = parse_published_at(date_str)
    if parsed_date is None:
        return date_str
    return parsed_date.strftime(DISPLAY_FORMAT)
