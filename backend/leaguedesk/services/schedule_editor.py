"""
Schedule Editor

Edits to a working schedule: the match form, replacing, deleting and adding
matches. Every operation returns a new list of weeks; the input is never
modified.
"""

import time
from typing import List, Optional, Sequence

from pydantic import BaseModel

from leaguedesk.api.types import ScheduleMatch, ScheduleWeek, SeasonParticipation, Venue


class ScheduleEditError(ValueError):
    """Edit cannot be applied to the schedule"""


class MatchForm(BaseModel):
    home_team_id: Optional[int] = None
    away_team_id: Optional[int] = None
    venue_id: Optional[int] = None
    date: str = ""
    is_bye: bool = False
    bye_team_id: Optional[int] = None


# ============================================================================
# Match form
# ============================================================================


def form_from_match(match: Optional[ScheduleMatch]) -> MatchForm:
    """Prefill the form from an existing match; a blank form for new matches."""
    if match is None:
        return MatchForm()
    return MatchForm(
        home_team_id=match.home_team_id,
        away_team_id=match.away_team_id,
        venue_id=match.venue_id,
        date=match.date or "",
        is_bye=match.is_bye,
        bye_team_id=match.bye_team_id,
    )


def form_errors(form: MatchForm) -> List[str]:
    errors = []
    if not form.date:
        errors.append("Date is required")
    if form.is_bye:
        if not form.bye_team_id:
            errors.append("Select the team that has the bye")
        return errors

    if not form.home_team_id or not form.away_team_id:
        errors.append("Select both a home and an away team")
    elif form.home_team_id == form.away_team_id:
        errors.append("A team cannot play itself")
    return errors


def is_form_valid(form: MatchForm) -> bool:
    return not form_errors(form)


def available_teams(
    teams: Sequence[SeasonParticipation], other_side_team_id: Optional[int]
) -> List[SeasonParticipation]:
    """Teams selectable for one side: everyone except the other side's pick."""
    return [t for t in teams if t.team != other_side_team_id]


def swap_home_away(form: MatchForm) -> MatchForm:
    return form.model_copy(update={"home_team_id": form.away_team_id, "away_team_id": form.home_team_id})


def _team_name(teams: Sequence[SeasonParticipation], team_id: Optional[int]) -> Optional[str]:
    for participation in teams:
        if participation.team == team_id:
            return participation.team_detail.name if participation.team_detail else None
    return None


def _venue_name(venues: Sequence[Venue], venue_id: Optional[int]) -> Optional[str]:
    for venue in venues:
        if venue.id == venue_id:
            return venue.name
    return None


def new_temp_id() -> str:
    return f"new-{int(time.time() * 1000)}"


def build_match(
    form: MatchForm,
    teams: Sequence[SeasonParticipation],
    venues: Sequence[Venue],
    existing: Optional[ScheduleMatch] = None,
) -> ScheduleMatch:
    """
    Turn a submitted form into a ScheduleMatch.

    Names are looked up from the season's teams and venues. A bye clears the
    home/away/venue fields. The existing match's id and temp_id are kept; a
    match without a temp_id gets a fresh "new-<ms>" one.

    Raises:
        ScheduleEditError if the form is not valid
    """
    errors = form_errors(form)
    if errors:
        raise ScheduleEditError("; ".join(errors))

    base = {
        "id": existing.id if existing else None,
        "temp_id": (existing.temp_id if existing else None) or new_temp_id(),
        "date": form.date,
        "is_bye": form.is_bye,
    }
    if form.is_bye:
        return ScheduleMatch(
            **base,
            bye_team_id=form.bye_team_id,
            bye_team_name=_team_name(teams, form.bye_team_id),
        )
    return ScheduleMatch(
        **base,
        home_team_id=form.home_team_id,
        home_team_name=_team_name(teams, form.home_team_id),
        away_team_id=form.away_team_id,
        away_team_name=_team_name(teams, form.away_team_id),
        venue_id=form.venue_id,
        venue_name=_venue_name(venues, form.venue_id),
    )


# ============================================================================
# Week edits
# ============================================================================


def _copy(weeks: Sequence[ScheduleWeek]) -> List[ScheduleWeek]:
    return [week.model_copy(deep=True) for week in weeks]


def _week_index(weeks: Sequence[ScheduleWeek], week_number: int) -> int:
    for index, week in enumerate(weeks):
        if week.week_number == week_number:
            return index
    raise ScheduleEditError(f"Week {week_number} is not in the schedule")


def _check_match_index(week: ScheduleWeek, match_index: int) -> None:
    if not 0 <= match_index < len(week.matches):
        raise ScheduleEditError(f"Week {week.week_number} has no match at position {match_index}")


def replace_match(
    weeks: Sequence[ScheduleWeek], week_number: int, match_index: int, match: ScheduleMatch
) -> List[ScheduleWeek]:
    updated = _copy(weeks)
    week = updated[_week_index(updated, week_number)]
    _check_match_index(week, match_index)
    week.matches[match_index] = match
    return updated


def delete_match(weeks: Sequence[ScheduleWeek], week_number: int, match_index: int) -> List[ScheduleWeek]:
    """Remove one match; a week left without matches is dropped unless it is a break week."""
    updated = _copy(weeks)
    index = _week_index(updated, week_number)
    week = updated[index]
    _check_match_index(week, match_index)
    del week.matches[match_index]
    if not week.matches and not week.is_break_week:
        del updated[index]
    return updated


def add_match(
    weeks: Sequence[ScheduleWeek],
    week_number: int,
    match: ScheduleMatch,
    week_date: Optional[str] = None,
) -> List[ScheduleWeek]:
    """
    Append a match to week_number, creating the week if needed.

    A new week is dated week_date, or the match date when none is given, and
    the weeks stay sorted by number. Break weeks cannot take matches.
    """
    updated = _copy(weeks)
    for week in updated:
        if week.week_number == week_number:
            if week.is_break_week:
                raise ScheduleEditError(f"Week {week_number} is a break week")
            week.matches.append(match)
            return updated

    updated.append(ScheduleWeek(week_number=week_number, date=week_date or match.date, matches=[match]))
    updated.sort(key=lambda w: w.week_number)
    return updated


def next_week_number(weeks: Sequence[ScheduleWeek]) -> int:
    """Week number offered for a manual add."""
    return len(weeks) + 1


def total_match_count(weeks: Sequence[ScheduleWeek]) -> int:
    return sum(len(week.matches) for week in weeks)
