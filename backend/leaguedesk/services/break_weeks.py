"""
Break week helpers.

The configuration stores break weeks as week numbers counted from the season
start date; operators pick them as calendar dates.
"""

from datetime import timedelta
from typing import List, Optional

from leaguedesk.utils.dates import parse_iso_date


class BreakWeekError(ValueError):
    pass


def week_number_for_date(start_date: str, break_date: str) -> int:
    """Week containing break_date: floor(days since start / 7) + 1.

    Raises BreakWeekError for unparsable dates or dates before the start.
    """
    start = parse_iso_date(start_date)
    target = parse_iso_date(break_date)
    if start is None:
        raise BreakWeekError("Please set a start date before adding break weeks")
    if target is None:
        raise BreakWeekError(f"'{break_date}' is not a valid date")

    week = (target - start).days // 7 + 1
    if week < 1:
        raise BreakWeekError("Break week cannot be before the season start date")
    return week


def date_for_week(start_date: str, week_number: int) -> Optional[str]:
    start = parse_iso_date(start_date)
    if start is None:
        return None
    return (start + timedelta(days=7 * (week_number - 1))).isoformat()


def break_dates(start_date: str, break_weeks: List[int]) -> List[str]:
    """Week numbers back to the dates shown in the picker."""
    if parse_iso_date(start_date) is None:
        return []
    return [date_for_week(start_date, week) for week in break_weeks]


def add_break_week(start_date: str, break_weeks: List[int], break_date: str) -> List[int]:
    """Return a new sorted list with the week for break_date added."""
    week = week_number_for_date(start_date, break_date)
    if week in break_weeks:
        raise BreakWeekError(f"Week {week} is already a break week")
    return sorted(break_weeks + [week])


def remove_break_week(break_weeks: List[int], index: int) -> List[int]:
    if not 0 <= index < len(break_weeks):
        raise BreakWeekError(f"No break week at position {index}")
    return break_weeks[:index] + break_weeks[index + 1:]
