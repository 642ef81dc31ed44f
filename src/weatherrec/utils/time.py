# src/weatherrec/utils/time.py
"""Time and date handling utilities."""

from __future__ import annotations

from datetime import UTC, date, datetime


class TimeUtils:
    """Time-related utility functions.

    Centralized utilities for working with dates and times:
    - Current time retrieval with proper timezone handling
    - ISO-8601 timestamp formatting for stored records
    - Lenient calendar date parsing for user input
    """

    @staticmethod
    def now_utc() -> datetime:
        """Get current datetime in UTC.

        Returns:
            Timezone-aware datetime in UTC
        """
        return datetime.now(UTC)

    @staticmethod
    def to_iso_timestamp(dt: datetime) -> str:
        """Format a datetime as a sortable UTC ISO-8601 string.

        Naive datetimes are assumed to be UTC. The result always carries
        microseconds and a ``Z`` suffix, e.g. ``2024-01-01T12:00:00.000000Z``,
        so lexical order matches chronological order.

        Args:
            dt: Datetime to format

        Returns:
            ISO-8601 timestamp string
        """
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=UTC)
        stamp = dt.astimezone(UTC).replace(tzinfo=None).isoformat(timespec="microseconds")
        return f"{stamp}Z"

    @staticmethod
    def parse_calendar_date(value: str) -> date:
        """Parse a calendar date from user input.

        Accepts ``YYYY-MM-DD`` or a full ISO datetime, in which case the date
        part is used.

        Args:
            value: Date string

        Returns:
            Parsed date

        Raises:
            ValueError: If the string is not a recognizable date
        """
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        # datetime.fromisoformat accepts "Z" from 3.11 on
        return datetime.fromisoformat(text).date()

