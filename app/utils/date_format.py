"""
Display date parsing and formatting.

The UI shows calendar days as DD.MM.YYYY and stores some of them that way
(payroll `date` / `payment_date`). Parsing never raises: anything that is not
a real calendar day comes back as None.
"""
from datetime import date, datetime
from typing import Optional, Union

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

DateLike = Union[str, date, datetime, None]


def parse_display_date(value: DateLike) -> Optional[date]:
    """
    Parse DD.MM.YYYY or ISO YYYY-MM-DD into a calendar day.

    ISO datetimes are truncated to their date part; date/datetime inputs are
    returned as their calendar day. Returns None for empty or invalid input.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    if "." in text:
        parts = text.split(".")
        if len(parts) != 3:
            return None
        day, month, year = parts
        if not (day.isdigit() and month.isdigit() and year.isdigit()):
            return None
        try:
            return date(int(year), int(month), int(day))
        except ValueError:
            return None

    # ISO date, optionally with a time part
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def format_display_date(value: DateLike) -> str:
    """Format as DD.MM.YYYY whatever format the input came in. Empty string if unparseable."""
    parsed = parse_display_date(value)
    if parsed is None:
        return ""
    return f"{parsed.day:02d}.{parsed.month:02d}.{parsed.year:04d}"


def format_long_date(value: DateLike) -> str:
    """Long form used in reminders and summaries, e.g. 'December 15, 2025'."""
    parsed = parse_display_date(value)
    if parsed is None:
        return ""
    return f"{MONTH_NAMES[parsed.month - 1]} {parsed.day}, {parsed.year}"


def month_name(month: int) -> str:
    """Long English month name for 1-12."""
    if not 1 <= month <= 12:
        raise ValueError(f"month must be between 1 and 12, got {month}")
    return MONTH_NAMES[month - 1]


def month_number(name: Optional[str]) -> Optional[int]:
    """Inverse of month_name (case-insensitive). None when the name is unknown."""
    if not name:
        return None
    lowered = name.strip().lower()
    for index, candidate in enumerate(MONTH_NAMES, start=1):
        if candidate.lower() == lowered:
            return index
    return None
