"""Preview summary and match card labels for a working schedule."""

from typing import List, Optional, Sequence

from pydantic import BaseModel

from leaguedesk.api.types import ScheduleMatch, ScheduleWeek
from leaguedesk.utils.dates import format_short_date

INITIAL_WEEKS_TO_SHOW = 4

EMPTY_MANUAL_MESSAGE = "No matches added yet. Click 'Add Match' to start building your schedule."
EMPTY_GENERATED_MESSAGE = "Generate a schedule to see the preview here."
BREAK_WEEK_MESSAGE = "No matches scheduled - Holiday/Break"


class MatchCard(BaseModel):
    is_bye: bool
    title: str
    home_label: Optional[str] = None
    away_label: Optional[str] = None
    venue_label: Optional[str] = None
    date_label: str = ""


class WeekPreview(BaseModel):
    week_number: int
    date_label: str
    is_break_week: bool
    note: Optional[str] = None
    matches: List[MatchCard] = []


class SchedulePreview(BaseModel):
    total_weeks: int
    total_matches: int
    weeks: List[WeekPreview] = []
    more_weeks: int = 0
    empty_message: Optional[str] = None


def team_label(name: Optional[str], team_id: Optional[int]) -> str:
    if name:
        return name
    return f"Team {team_id}" if team_id else "TBD"


def match_card(match: ScheduleMatch) -> MatchCard:
    date_label = format_short_date(match.date, with_weekday=True, with_year=False)
    if match.is_bye:
        bye_label = match.bye_team_name or f"Team {match.bye_team_id}"
        return MatchCard(is_bye=True, title=f"{bye_label} - BYE", home_label=bye_label, date_label=date_label)

    home = team_label(match.home_team_name, match.home_team_id)
    away = team_label(match.away_team_name, match.away_team_id)
    return MatchCard(
        is_bye=False,
        title=f"{home} vs {away}",
        home_label=home,
        away_label=away,
        venue_label=match.venue_name or "Venue TBD",
        date_label=date_label,
    )


def build_preview(
    weeks: Sequence[ScheduleWeek], is_manual: bool = False, expanded: bool = False
) -> SchedulePreview:
    """Collapsed previews show the first INITIAL_WEEKS_TO_SHOW weeks plus a count of the rest."""
    if not weeks:
        return SchedulePreview(
            total_weeks=0,
            total_matches=0,
            empty_message=EMPTY_MANUAL_MESSAGE if is_manual else EMPTY_GENERATED_MESSAGE,
        )

    shown = list(weeks) if expanded else list(weeks[:INITIAL_WEEKS_TO_SHOW])
    return SchedulePreview(
        total_weeks=len(weeks),
        total_matches=sum(len(week.matches) for week in weeks),
        weeks=[
            WeekPreview(
                week_number=week.week_number,
                date_label=format_short_date(week.date),
                is_break_week=week.is_break_week,
                note=BREAK_WEEK_MESSAGE if week.is_break_week else None,
                matches=[match_card(m) for m in week.matches],
            )
            for week in shown
        ],
        more_weeks=len(weeks) - len(shown),
    )
