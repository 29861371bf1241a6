"""Human-readable date/time strings for API responses.

These never raise on bad input: they return a sentinel string instead
("Date not set", "Invalid Date", "Time not set", "Invalid Time").
"""

import logging
import re
from datetime import date, datetime, time

logger = logging.getLogger(__name__)

DATE_NOT_SET = "Date not set"
INVALID_DATE = "Invalid Date"
TIME_NOT_SET = "Time not set"
INVALID_TIME = "Invalid Time"

MIN_YEAR = 1900
MAX_YEAR = 2100

_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME = re.compile(r"^\s*(\d{1,2}):(\d{1,2})(?::\d{1,2}(?:\.\d+)?)?\s*$")


def _parse_date(value: str) -> date | None:
    value = value.strip()
    try:
        if _DATE_ONLY.match(value):
            return date.fromisoformat(value)
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        return datetime.fromisoformat(value).date()
    except ValueError:
        return None


def format_date(value: str | date | None) -> str:
    """Format a date as e.g. "Monday, January 1, 2024".

    Accepts a date, a datetime, a YYYY-MM-DD string or an ISO datetime
    string. Years outside 1900..2100 are treated as invalid.
    """
    if not value:
        return DATE_NOT_SET

    if isinstance(value, datetime):
        parsed: date | None = value.date()
    elif isinstance(value, date):
        parsed = value
    else:
        parsed = _parse_date(str(value))

    if parsed is None:
        logger.debug("Invalid date string: %r", value)
        return INVALID_DATE
    if not MIN_YEAR <= parsed.year <= MAX_YEAR:
        logger.debug("Date out of bounds: %r", value)
        return INVALID_DATE

    return f"{parsed:%A}, {parsed:%B} {parsed.day}, {parsed.year}"


def format_time(value: str | time | None) -> str:
    """Format a time of day as a 12-hour clock string, e.g. "10:00 AM"."""
    if value is None or value == "":
        return TIME_NOT_SET

    if isinstance(value, time):
        hours, minutes = value.hour, value.minute
    else:
        match = _TIME.match(str(value))
        if match is None:
            logger.debug("Invalid time format: %r", value)
            return INVALID_TIME
        hours, minutes = int(match.group(1)), int(match.group(2))
        if not (0 <= hours <= 23 and 0 <= minutes <= 59):
            logger.debug("Invalid time values: %r", value)
            return INVALID_TIME

    suffix = "AM" if hours < 12 else "PM"
    return f"{hours % 12 or 12}:{minutes:02d} {suffix}"
