"""
Schedule Warnings

Two levels of checks over a working schedule:

structural_errors - broken invariants; a schedule with any of these cannot
    be saved (bye/regular match shape including the venue, matches in break
    weeks, duplicate week numbers).
compute_warnings  - problems an operator may accept (venue over capacity,
    double-booked teams, missing venues, dates outside their week, weeks
    past the season end).
"""

from collections import Counter
from datetime import timedelta
from typing import Dict, List, Optional, Sequence

from leaguedesk.api.types import ScheduleMatch, ScheduleWarning, ScheduleWeek, Venue
from leaguedesk.utils.dates import parse_iso_date

# Order of warning types within one week
WARNING_TYPE_ORDER = ("venue_conflict", "team_conflict", "missing_venue", "date_conflict", "season_overflow")


def _team_label(name: Optional[str], team_id: Optional[int]) -> str:
    if name:
        return name
    return f"Team {team_id}" if team_id is not None else "TBD"


def _match_label(match: ScheduleMatch) -> str:
    if match.is_bye:
        return f"Bye for {_team_label(match.bye_team_name, match.bye_team_id)}"
    home = _team_label(match.home_team_name, match.home_team_id)
    away = _team_label(match.away_team_name, match.away_team_id)
    return f"{home} vs {away}"


# ============================================================================
# Structural validation
# ============================================================================


def match_errors(match: ScheduleMatch) -> List[str]:
    if match.is_bye:
        errors = []
        if match.bye_team_id is None:
            errors.append("bye has no team")
        if match.home_team_id is not None or match.away_team_id is not None:
            errors.append("bye cannot have home or away teams")
        if match.venue_id is not None:
            errors.append("bye cannot have a venue")
        return errors

    errors = []
    if match.home_team_id is None or match.away_team_id is None:
        errors.append(f"{_match_label(match)} needs both a home and an away team")
    elif match.home_team_id == match.away_team_id:
        errors.append(f"{_match_label(match)} has the same team on both sides")
    if match.venue_id is None:
        errors.append(f"{_match_label(match)} has no venue")
    return errors


def structural_errors(weeks: Sequence[ScheduleWeek]) -> List[str]:
    """Every invariant violation, prefixed with the week it occurs in."""
    errors: List[str] = []

    counts = Counter(week.week_number for week in weeks)
    for week_number in sorted(n for n, count in counts.items() if count > 1):
        errors.append(f"Week {week_number} appears {counts[week_number]} times")

    for week in weeks:
        if week.is_break_week and week.matches:
            errors.append(f"Week {week.week_number}: break week has {len(week.matches)} match(es)")
        for match in week.matches:
            errors.extend(f"Week {week.week_number}: {error}" for error in match_errors(match))

    return errors


# ============================================================================
# Warnings
# ============================================================================


def _venue_conflicts(week: ScheduleWeek, tables: Dict[int, int]) -> List[ScheduleWarning]:
    per_venue = Counter(m.venue_id for m in week.matches if not m.is_bye and m.venue_id is not None)
    names = {m.venue_id: m.venue_name for m in week.matches if m.venue_id is not None}

    warnings = []
    for venue_id in sorted(per_venue):
        count = per_venue[venue_id]
        available = tables.get(venue_id, 1)
        if count > available:
            name = names.get(venue_id) or f"Venue {venue_id}"
            warnings.append(
                ScheduleWarning(
                    type="venue_conflict",
                    message=f"{name} has {count} matches but only {available} table(s)",
                    week_number=week.week_number,
                )
            )
    return warnings


def _team_conflicts(week: ScheduleWeek) -> List[ScheduleWarning]:
    appearances = Counter()
    names = {}
    for match in week.matches:
        if match.is_bye:
            sides = [(match.bye_team_id, match.bye_team_name)]
        else:
            sides = [(match.home_team_id, match.home_team_name), (match.away_team_id, match.away_team_name)]
        for team_id, team_name in sides:
            if team_id is None:
                continue
            appearances[team_id] += 1
            names.setdefault(team_id, team_name)

    return [
        ScheduleWarning(
            type="team_conflict",
            message=f"{_team_label(names[team_id], team_id)} is scheduled {appearances[team_id]} times",
            week_number=week.week_number,
        )
        for team_id in sorted(appearances)
        if appearances[team_id] > 1
    ]


def _missing_venues(week: ScheduleWeek) -> List[ScheduleWarning]:
    return [
        ScheduleWarning(
            type="missing_venue",
            message=f"{_match_label(match)} has no venue",
            week_number=week.week_number,
        )
        for match in week.matches
        if not match.is_bye and match.venue_id is None
    ]


def _date_conflicts(week: ScheduleWeek) -> List[ScheduleWarning]:
    if week.is_break_week and week.matches:
        return [
            ScheduleWarning(
                type="date_conflict",
                message=f"{len(week.matches)} match(es) scheduled during a break week",
                week_number=week.week_number,
            )
        ]

    week_start = parse_iso_date(week.date)
    if week_start is None:
        return []
    week_end = week_start + timedelta(days=6)

    warnings = []
    for match in week.matches:
        played = parse_iso_date(match.date)
        if played is not None and not week_start <= played <= week_end:
            warnings.append(
                ScheduleWarning(
                    type="date_conflict",
                    message=f"{_match_label(match)} on {match.date} falls outside the week of {week.date}",
                    week_number=week.week_number,
                )
            )
    return warnings


def _season_overflow(week: ScheduleWeek, season_end) -> List[ScheduleWarning]:
    week_start = parse_iso_date(week.date)
    if season_end is None or week_start is None or week_start <= season_end:
        return []
    return [
        ScheduleWarning(
            type="season_overflow",
            message=f"Week of {week.date} is after the season end date {season_end.isoformat()}",
            week_number=week.week_number,
        )
    ]


def compute_warnings(
    weeks: Sequence[ScheduleWeek],
    venues: Sequence[Venue] = (),
    season_end_date: Optional[str] = None,
) -> List[ScheduleWarning]:
    """Warnings ordered by week number, then by WARNING_TYPE_ORDER."""
    tables = {venue.id: venue.table_count or 1 for venue in venues}
    season_end = parse_iso_date(season_end_date)

    warnings: List[ScheduleWarning] = []
    for week in sorted(weeks, key=lambda w: w.week_number):
        found = (
            _venue_conflicts(week, tables)
            + _team_conflicts(week)
            + _missing_venues(week)
            + _date_conflicts(week)
            + _season_overflow(week, season_end)
        )
        found.sort(key=lambda w: WARNING_TYPE_ORDER.index(w.type))
        warnings.extend(found)
    return warnings


# ============================================================================
# Display
# ============================================================================


def format_warning(warning: ScheduleWarning) -> str:
    if warning.week_number is not None:
        return f"Week {warning.week_number}: {warning.message}"
    return warning.message


def warnings_headline(count: int) -> str:
    return f"{count} Warning" if count == 1 else f"{count} Warnings"
