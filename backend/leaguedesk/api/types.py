"""
League API Models

Pydantic models mirroring the league API payloads. Instances are transient
copies of server state; the server owns identifiers and validation.

The schedule structures at the bottom are the exception: they are built and
edited locally until a schedule is saved.
"""

from typing import Dict, Generic, List, Literal, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class ApiModel(BaseModel):
    """Base for API payloads; unknown server fields are ignored."""

    model_config = ConfigDict(extra="ignore")


# ============================================================================
# Pagination
# ============================================================================


class PaginatedResponse(ApiModel, Generic[T]):
    count: int
    next: Optional[str] = None
    previous: Optional[str] = None
    results: List[T] = Field(default_factory=list)


# ============================================================================
# Users & Players
# ============================================================================


class User(ApiModel):
    id: int
    username: str
    email: str
    first_name: str = ""
    last_name: str = ""


class CaptainOf(ApiModel):
    team_id: int
    team_name: str
    appointed_at: str


class Player(ApiModel):
    id: int
    user: Optional[User] = None
    user_id: Optional[int] = None
    full_name: str
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    skill_level: Optional[float] = None
    is_claimed: bool = False
    needs_activation: bool = False
    invite_token: Optional[str] = None
    invite_sent_at: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    captain_of_teams: List[CaptainOf] = Field(default_factory=list)


class PlayerList(ApiModel):
    id: int
    full_name: str
    email: str = ""


class PlayerUpdateData(ApiModel):
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    skill_level: Optional[float] = None


# ============================================================================
# Leagues & Seasons
# ============================================================================


class League(ApiModel):
    id: int
    name: str
    description: Optional[str] = None
    city: str = ""
    state: str = ""
    country: str = ""
    sets_per_match: int = 0
    games_per_set: int = 0
    points_per_win: int = 0
    is_active: bool = True
    created_at: Optional[str] = None
    season_count: Optional[int] = None
    total_games: Optional[int] = None


class LeagueList(ApiModel):
    id: int
    name: str
    city: str = ""
    state: str = ""
    sets_per_match: int = 0
    games_per_set: int = 0


class LeagueOperator(ApiModel):
    id: int
    league: int
    league_detail: Optional[LeagueList] = None
    player: int
    player_detail: Optional[PlayerList] = None
    role: str
    appointed_at: str


class Season(ApiModel):
    id: int
    league: int
    league_detail: Optional[LeagueList] = None
    name: str
    invite_code: str = ""
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    is_active: bool = True
    is_archived: bool = False
    created_at: Optional[str] = None
    team_count: Optional[int] = None


class SeasonList(ApiModel):
    id: int
    name: str
    league_name: str = ""
    invite_code: str = ""
    is_active: bool = True


class Venue(ApiModel):
    id: int
    league: Optional[int] = None
    name: str
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    table_count: Optional[int] = None
    is_active: bool = True


# ============================================================================
# Teams
# ============================================================================


class TeamCaptain(ApiModel):
    id: int
    player: int
    player_detail: Optional[PlayerList] = None
    appointed_at: str


class Team(ApiModel):
    id: int
    name: str
    establishment: str = ""
    captains_detail: List[TeamCaptain] = Field(default_factory=list)
    player_count: Optional[int] = None
    active: bool = True
    created_at: Optional[str] = None


class TeamCaptainSummary(ApiModel):
    id: int
    name: str


class TeamList(ApiModel):
    id: int
    name: str
    establishment: str = ""
    captains: List[TeamCaptainSummary] = Field(default_factory=list)


class TeamRegistrationData(ApiModel):
    name: str
    establishment: str


class SeasonParticipation(ApiModel):
    """A team's participation (and record) in one season."""

    id: int
    season: int
    season_detail: Optional[SeasonList] = None
    team: int
    team_detail: Optional[TeamList] = None
    wins: int = 0
    losses: int = 0
    win_percentage: Optional[float] = None
    joined_at: Optional[str] = None
    is_active: bool = True


class TeamMembership(ApiModel):
    id: int
    team: int
    team_detail: Optional[TeamList] = None
    player: int
    player_detail: Optional[PlayerList] = None
    joined_at: str
    is_active: bool = True
    left_at: Optional[str] = None


class CaptainRequest(ApiModel):
    id: int
    team: int
    team_detail: Optional[TeamList] = None
    player: int
    player_detail: Optional[PlayerList] = None
    status: Literal["pending", "approved", "denied"]
    message: str = ""
    created_at: str
    reviewed_at: Optional[str] = None
    reviewed_by: Optional[int] = None
    reviewed_by_detail: Optional[PlayerList] = None


# ============================================================================
# Matches
# ============================================================================

LineupState = Literal[
    "not_started",
    "awaiting_away_lineup",
    "awaiting_home_lineup",
    "ready_to_start",
    "match_live",
    "awaiting_confirmation",
    "completed",
]

MatchStatus = Literal["scheduled", "in_progress", "awaiting_confirmation", "completed", "cancelled"]


class Match(ApiModel):
    id: int
    season: int
    week_number: Optional[int] = None
    home_team: int
    home_team_detail: Optional[TeamList] = None
    away_team: int
    away_team_detail: Optional[TeamList] = None
    date: str
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    status: MatchStatus = "scheduled"
    lineup_state: Optional[LineupState] = None
    away_lineup_submitted: Optional[bool] = None
    home_lineup_submitted: Optional[bool] = None
    match_started: Optional[bool] = None


class MatchScoreSubmission(ApiModel):
    home_score: int
    away_score: int


class LineupPlayer(ApiModel):
    id: int
    full_name: str


class MatchLineupGame(ApiModel):
    game_number: int
    set_number: int
    away_player: Optional[LineupPlayer] = None
    home_player: Optional[LineupPlayer] = None


class MatchLineupResponse(ApiModel):
    away_lineup_submitted: bool
    home_lineup_submitted: bool
    match_started: bool
    games: List[MatchLineupGame] = Field(default_factory=list)


# ============================================================================
# Standings & Stats
# ============================================================================


class TeamStanding(ApiModel):
    place: int
    team_id: int
    team_name: str
    establishment: str = ""
    wins: int
    losses: int
    total_games: int
    win_percentage: float
    games_behind: Optional[Union[float, str]] = None  # "-" for the leader


class SeasonStandingsResponse(ApiModel):
    league_id: int
    league_name: str
    season_id: int
    season_name: str
    standings: List[TeamStanding] = Field(default_factory=list)


class PlayerWeekStat(ApiModel):
    week: int
    wins: int
    losses: int


class PlayerSeasonStat(ApiModel):
    player_id: int
    player_name: str
    team_id: Optional[int] = None
    team_name: Optional[str] = None
    total_wins: int
    total_losses: int
    total_games: Optional[int] = None
    win_percentage: Optional[float] = None
    table_runs: int = 0
    eight_ball_breaks: int = 0
    weeks: List[PlayerWeekStat] = Field(default_factory=list)


class SeasonPlayersResponse(ApiModel):
    league_id: int
    league_name: str
    season_id: int
    season_name: str
    player_count: int
    players: List[PlayerSeasonStat] = Field(default_factory=list)


class TeamSeasonStats(ApiModel):
    team_id: int
    team_name: str
    season_id: int
    season_name: str
    players: List[PlayerSeasonStat] = Field(default_factory=list)


class LeagueStats(ApiModel):
    active_teams: int
    active_players: int
    venues: int
    matches_played: int


# ============================================================================
# Current user context (/me/)
# ============================================================================


class MeTeam(ApiModel):
    id: int
    name: str
    establishment: str = ""
    is_captain: bool = False
    active: bool = True


class MeSeason(ApiModel):
    id: int
    name: str
    league_id: int
    league_name: str
    is_active: bool = True
    start_date: Optional[str] = None
    end_date: Optional[str] = None


class MeLeague(ApiModel):
    id: int
    name: str
    city: str = ""
    state: str = ""
    is_operator: bool = False
    role: Optional[str] = None


class MePlayer(ApiModel):
    id: int
    full_name: str
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    skill_level: Optional[float] = None


class MeResponse(ApiModel):
    player: Optional[MePlayer] = None
    teams: List[MeTeam] = Field(default_factory=list)
    seasons: List[MeSeason] = Field(default_factory=list)
    leagues: List[MeLeague] = Field(default_factory=list)


# ============================================================================
# Schedule configuration, preview & save
# ============================================================================

ScheduleWarningType = Literal[
    "venue_conflict",
    "season_overflow",
    "team_conflict",
    "missing_venue",
    "date_conflict",
]


class ScheduleConfiguration(ApiModel):
    """Parameters sent to the server's schedule generator."""

    start_date: str = ""  # YYYY-MM-DD, empty until chosen
    matches_per_week: int = 4
    times_play_each_other: int = 1
    alternating_home_away: bool = True
    break_weeks: List[int] = Field(default_factory=list)
    bye_weeks: List[int] = Field(default_factory=list)
    tables_per_establishment: Dict[int, int] = Field(default_factory=dict)


class ScheduleMatch(ApiModel):
    """
    One proposed fixture.

    Either a bye (is_bye, bye_team_id set, no venue) or a regular match
    (home_team_id != away_team_id, venue_id set). Server output may leave
    teams unset ("TBD"); structural checks live in schedule_warnings.
    """

    id: Optional[int] = None
    temp_id: Optional[str] = None
    home_team_id: Optional[int] = None
    home_team_name: Optional[str] = None
    away_team_id: Optional[int] = None
    away_team_name: Optional[str] = None
    venue_id: Optional[int] = None
    venue_name: Optional[str] = None
    date: str = ""
    is_bye: bool = False
    bye_team_id: Optional[int] = None
    bye_team_name: Optional[str] = None


class ScheduleWeek(ApiModel):
    week_number: int
    date: str
    matches: List[ScheduleMatch] = Field(default_factory=list)
    is_break_week: bool = False


class ScheduleWarning(ApiModel):
    type: ScheduleWarningType
    message: str
    week_number: Optional[int] = None


class GeneratedScheduleResponse(ApiModel):
    schedule: List[ScheduleWeek] = Field(default_factory=list)
    warnings: List[ScheduleWarning] = Field(default_factory=list)


class SaveScheduleRequest(ApiModel):
    schedule: List[ScheduleWeek]
    configuration: ScheduleConfiguration
    is_manual: bool = False


class SaveScheduleResponse(ApiModel):
    success: bool
    matches_created: int = 0
