"""
Schedule Estimator

Closed-form estimates for a season schedule configuration. The pairing engine
itself runs on the league API server; these numbers only tell the operator
what a configuration implies before asking the server to generate it.

Formulas:
- total matches  = teams * (teams - 1) * times_play_each_other / 2
- season weeks   = ceil(total matches / matches_per_week)
- calendar weeks = season weeks + distinct break weeks
- max matches/wk = max(1, floor(teams / 2))

Venue capacity: each table hosts one match per week night. A venue is in
conflict when the matches it may have to host in one week (home teams based
there, capped by matches per week) exceed its tables.
"""

import math
from datetime import timedelta
from typing import Iterable, List, Optional, Sequence

from pydantic import BaseModel

from leaguedesk.api.types import ScheduleConfiguration, SeasonParticipation, Venue
from leaguedesk.utils.dates import format_short_date, parse_iso_date

DEFAULT_SEASON_WEEKS_ESTIMATE = 14
DEFAULT_MATCHES_PER_WEEK = 4
MIN_TEAMS_FOR_SCHEDULE = 2
TIMES_PLAY_EACH_OTHER_OPTIONS = (1, 2, 3, 4)
ROUND_ROBIN_NAMES = {1: "Single", 2: "Double", 3: "Triple", 4: "Quad"}

# Parameter keys, in grid order
PARAMETER_TYPES = (
    "start_date",
    "teams",
    "establishments",
    "tables_per_establishment",
    "matches_per_week",
    "times_play_each_other",
    "alternating_home_away",
    "break_weeks",
)
READ_ONLY_PARAMETERS = ("teams", "establishments")


class ScheduleConfigurationError(ValueError):
    """Configuration cannot be used to generate a schedule"""

    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


class VenueCapacity(BaseModel):
    venue_id: int
    venue_name: str
    table_count: int
    home_team_count: int
    peak_weekly_matches: int
    conflict: bool


class ScheduleEstimate(BaseModel):
    team_count: int
    total_matches: int
    season_weeks: int
    calendar_weeks: int
    max_matches_per_week: int
    total_tables: int
    weekly_capacity_shortfall: bool
    projected_end_date: Optional[str] = None
    season_overflow: bool = False
    venue_capacity: List[VenueCapacity] = []


class ParameterBox(BaseModel):
    type: str
    label: str
    value: str
    read_only: bool = False


# ============================================================================
# Counts
# ============================================================================


def _repeats(times_play_each_other: Optional[int]) -> int:
    return times_play_each_other or 1


def total_matches(team_count: int, times_play_each_other: Optional[int] = 1) -> int:
    """Every pair meets times_play_each_other times. n(n-1) is always even."""
    if team_count < 2:
        return 0
    return team_count * (team_count - 1) * _repeats(times_play_each_other) // 2


def estimate_season_weeks(
    team_count: Optional[int],
    times_play_each_other: Optional[int] = 1,
    matches_per_week: Optional[int] = DEFAULT_MATCHES_PER_WEEK,
) -> int:
    """
    Playing weeks needed for the full round robin.

    team_count None means the team list is not known yet and yields the
    default estimate. matches_per_week of 0/None counts as 1.
    """
    if team_count is None:
        return DEFAULT_SEASON_WEEKS_ESTIMATE
    return math.ceil(total_matches(team_count, times_play_each_other) / (matches_per_week or 1))


def max_matches_per_week(team_count: int) -> int:
    return max(1, team_count // 2)


def default_matches_per_week(team_count: int) -> int:
    """Every team plays each week once the team list is known."""
    if team_count <= 0:
        return DEFAULT_MATCHES_PER_WEEK
    return max_matches_per_week(team_count)


def calendar_weeks(season_weeks: int, break_weeks: Iterable[int]) -> int:
    """Each distinct break week adds one week to the calendar span."""
    if season_weeks <= 0:
        return 0
    return season_weeks + len(set(break_weeks))


def projected_end_date(start_date: Optional[str], weeks: int) -> Optional[str]:
    """Date of the last calendar week (start + (weeks - 1) * 7 days)."""
    start = parse_iso_date(start_date)
    if start is None or weeks <= 0:
        return None
    return (start + timedelta(days=7 * (weeks - 1))).isoformat()


def venue_table_count(venue: Venue) -> int:
    return venue.table_count or 1


def total_tables(venues: Sequence[Venue]) -> int:
    return sum(venue_table_count(v) for v in venues)


def _normalize(name: Optional[str]) -> str:
    return (name or "").strip().lower()


def venue_capacity(
    venues: Sequence[Venue],
    teams: Sequence[SeasonParticipation],
    matches_per_week: int,
) -> List[VenueCapacity]:
    """Per-venue worst-case weekly load, matched on team establishment name."""
    home_counts = {}
    for participation in teams:
        establishment = _normalize(participation.team_detail.establishment if participation.team_detail else "")
        if establishment:
            home_counts[establishment] = home_counts.get(establishment, 0) + 1

    results = []
    for venue in sorted(venues, key=lambda v: v.id):
        tables = venue_table_count(venue)
        home_team_count = home_counts.get(_normalize(venue.name), 0)
        peak = min(home_team_count, matches_per_week or 1)
        results.append(
            VenueCapacity(
                venue_id=venue.id,
                venue_name=venue.name,
                table_count=tables,
                home_team_count=home_team_count,
                peak_weekly_matches=peak,
                conflict=peak > tables,
            )
        )
    return results


def estimate_schedule(
    config: ScheduleConfiguration,
    teams: Optional[Sequence[SeasonParticipation]],
    venues: Sequence[Venue],
    season_end_date: Optional[str] = None,
) -> ScheduleEstimate:
    """All derived numbers for a configuration. teams None = not loaded yet."""
    team_count = len(teams) if teams is not None else 0
    season_weeks = estimate_season_weeks(
        len(teams) if teams is not None else None,
        config.times_play_each_other,
        config.matches_per_week,
    )
    weeks = calendar_weeks(season_weeks, config.break_weeks)
    end_date = projected_end_date(config.start_date, weeks)
    tables = total_tables(venues)

    season_end = parse_iso_date(season_end_date)
    projected_end = parse_iso_date(end_date)
    overflow = bool(season_end and projected_end and projected_end > season_end)

    return ScheduleEstimate(
        team_count=team_count,
        total_matches=total_matches(team_count, config.times_play_each_other),
        season_weeks=season_weeks,
        calendar_weeks=weeks,
        max_matches_per_week=max_matches_per_week(team_count),
        total_tables=tables,
        weekly_capacity_shortfall=bool(venues) and (config.matches_per_week or 1) > tables,
        projected_end_date=end_date,
        season_overflow=overflow,
        venue_capacity=venue_capacity(venues, teams or [], config.matches_per_week),
    )


# ============================================================================
# Validation
# ============================================================================


def validate_configuration(config: ScheduleConfiguration, team_count: int) -> List[str]:
    """Every reason the configuration cannot be sent to the generator."""
    errors: List[str] = []

    if not config.start_date:
        errors.append("Please set a start date")
    elif parse_iso_date(config.start_date) is None:
        errors.append(f"Start date '{config.start_date}' is not a valid YYYY-MM-DD date")

    if team_count < MIN_TEAMS_FOR_SCHEDULE:
        errors.append(f"Need at least {MIN_TEAMS_FOR_SCHEDULE} teams to generate a schedule")
    else:
        upper = max_matches_per_week(team_count)
        if not 1 <= config.matches_per_week <= upper:
            errors.append(f"Matches per week must be between 1 and {upper} for {team_count} teams")

    if config.times_play_each_other not in TIMES_PLAY_EACH_OTHER_OPTIONS:
        errors.append(
            f"Times teams play each other must be between {TIMES_PLAY_EACH_OTHER_OPTIONS[0]} "
            f"and {TIMES_PLAY_EACH_OTHER_OPTIONS[-1]}"
        )

    seen = set()
    for week in config.break_weeks:
        if week < 1:
            errors.append(f"Break week {week} is not a valid week number")
        elif week in seen:
            errors.append(f"Break week {week} is listed more than once")
        seen.add(week)

    return errors


def require_valid_configuration(config: ScheduleConfiguration, team_count: int) -> None:
    errors = validate_configuration(config, team_count)
    if errors:
        raise ScheduleConfigurationError(errors)


# ============================================================================
# Display
# ============================================================================


def round_robin_label(times_play_each_other: int) -> str:
    name = ROUND_ROBIN_NAMES.get(times_play_each_other, f"{times_play_each_other}x")
    return f"{name} Round Robin"


def _times_label(times_play_each_other: Optional[int]) -> str:
    times = _repeats(times_play_each_other)
    return "1 time" if times == 1 else f"{times} times"


def _break_weeks_label(break_weeks: Sequence[int]) -> str:
    if not break_weeks:
        return "None set"
    if len(break_weeks) == 1:
        return f"Week {break_weeks[0]}"
    return f"{len(break_weeks)} weeks"


def parameter_grid(
    config: ScheduleConfiguration,
    teams: Sequence[SeasonParticipation],
    venues: Sequence[Venue],
) -> List[ParameterBox]:
    """Label/value pairs for the eight schedule parameters, in grid order."""
    values = {
        "start_date": ("Start Date", format_short_date(config.start_date) or "Select date..."),
        "teams": ("Teams", f"{len(teams)} teams" if teams else "None yet"),
        "establishments": ("Venues", f"{len(venues)} venues" if venues else "None yet"),
        "tables_per_establishment": (
            "Adjust Tables",
            f"{total_tables(venues)} tables" if venues else "No venues",
        ),
        "matches_per_week": ("Matches/Week", f"{config.matches_per_week} matches"),
        "times_play_each_other": ("Play Each Other", _times_label(config.times_play_each_other)),
        "alternating_home_away": ("Home/Away", "Alternating" if config.alternating_home_away else "Fixed"),
        "break_weeks": ("Break Weeks", _break_weeks_label(config.break_weeks)),
    }
    return [
        ParameterBox(
            type=param_type,
            label=values[param_type][0],
            value=values[param_type][1],
            read_only=param_type in READ_ONLY_PARAMETERS,
        )
        for param_type in PARAMETER_TYPES
    ]
