"""Timestamp and date helpers."""

import re
from datetime import date, datetime
from typing import Optional, Union

# Leading calendar date of a front-matter date value, e.g. "2014-03-07 10:00:00 +0100"
_LEADING_DATE = re.compile(r"^\s*(\d{4})-(\d{1,2})-(\d{1,2})(?:$|[\sT])")


def now() -> str:
    """Current local time as a compact, sortable string (e.g. "20251114_123456")."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def parse_post_date(value: Union[str, date, None]) -> Optional[date]:
    """
    Extract the calendar date from a front-matter ``date`` value.

    Accepts the forms Jekyll-style blogs use: "2014-03-07",
    "2014-3-7", "2014-03-07 10:00:00 +0100" and ISO 8601 with a "T"
    separator. Time and timezone parts are ignored.

    Args:
        value: Raw front-matter value (string, date/datetime, or None)

    Returns:
        The date, or None if value is missing or not a recognizable date

    Examples:
        parse_post_date("2014-03-07 10:00:00 +0100")
        # date(2014, 3, 7)

        parse_post_date("last tuesday")
        # None
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    match = _LEADING_DATE.match(str(value))
    if not match:
        return None

    try:
        return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
    except ValueError:
        # Shape matched but the date does not exist (e.g. 2014-02-30)
        return None
