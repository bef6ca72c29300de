"""
Date helpers for YYYY-MM-DD strings

Schedule dates travel as plain ISO date strings. They are parsed as naive
calendar dates so no timezone conversion can shift a match to another day.
"""

from datetime import date
from typing import Optional


def parse_iso_date(value: Optional[str]) -> Optional[date]:
    """Parse "YYYY-MM-DD" (a datetime string is cut to its date part).

    Returns None for empty or malformed input.
    """
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def format_local_date(value: str) -> str:
    """2026-03-05 -> 3/5/2026"""
    year, month, day = (int(part) for part in value.split("-"))
    return f"{month}/{day}/{year}"


def format_date_us(value: str) -> str:
    """2026-03-05 -> 03/05/2026"""
    year, month, day = value.split("-")
    return f"{month}/{day}/{year}"


def format_short_date(value: Optional[str], with_weekday: bool = False, with_year: bool = True) -> str:
    """
    Display form used on schedule screens.

    "Mar 5, 2026" by default, "Thu, Mar 5" with a weekday and no year.
    Returns "" for unparsable input.
    """
    parsed = parse_iso_date(value)
    if parsed is None:
        return ""
    text = f"{parsed.strftime('%b')} {parsed.day}"
    if with_year:
        text = f"{text}, {parsed.year}"
    if with_weekday:
        text = f"{parsed.strftime('%a')}, {text}"
    return text
