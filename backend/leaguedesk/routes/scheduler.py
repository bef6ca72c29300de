"""
Season scheduler workflow.

A schedule is configured, generated by the league API (or built by hand in
manual mode), edited as a draft stored locally, and finally saved back to
the league API, which creates the matches.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, ValidationError
from sqlmodel import Session

from leaguedesk.api import ApiError, LeagueApi
from leaguedesk.api.types import (
    SaveScheduleRequest,
    ScheduleConfiguration,
    ScheduleWarning,
    ScheduleWeek,
    Season,
    SeasonParticipation,
    Venue,
)
from leaguedesk.database import get_session
from leaguedesk.dependencies import api_error_to_http, get_league_api
from leaguedesk.models.schedule_draft import ScheduleDraft
from leaguedesk.services.break_weeks import (
    BreakWeekError,
    add_break_week,
    break_dates,
    date_for_week,
    remove_break_week,
)
from leaguedesk.services.schedule_editor import (
    MatchForm,
    ScheduleEditError,
    add_match,
    available_teams,
    build_match,
    delete_match,
    form_from_match,
    next_week_number,
    replace_match,
    swap_home_away,
)
from leaguedesk.services.schedule_estimator import (
    ParameterBox,
    ScheduleConfigurationError,
    ScheduleEstimate,
    TIMES_PLAY_EACH_OTHER_OPTIONS,
    default_matches_per_week,
    estimate_schedule,
    parameter_grid,
    require_valid_configuration,
    round_robin_label,
    total_tables,
)
from leaguedesk.services.schedule_preview import SchedulePreview, build_preview
from leaguedesk.services.schedule_warnings import (
    compute_warnings,
    format_warning,
    structural_errors,
    warnings_headline,
)
from leaguedesk.services.venue_tables import apply_table_changes, current_counts
from leaguedesk.utils.draft_guards import get_draft_or_404, require_editable_draft

logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================================================
# Request/Response Models
# ============================================================================


class RoundRobinOption(BaseModel):
    value: int
    label: str


class SchedulerContextResponse(BaseModel):
    season: Season
    teams: List[SeasonParticipation]
    venues: List[Venue]
    configuration: ScheduleConfiguration
    estimate: ScheduleEstimate
    parameters: List[ParameterBox]
    round_robin_options: List[RoundRobinOption]


class CreateDraftRequest(BaseModel):
    configuration: Optional[ScheduleConfiguration] = None
    is_manual: bool = False


class ConfigurationUpdate(BaseModel):
    start_date: Optional[str] = None
    matches_per_week: Optional[int] = None
    times_play_each_other: Optional[int] = None
    alternating_home_away: Optional[bool] = None
    break_weeks: Optional[List[int]] = None
    bye_weeks: Optional[List[int]] = None


class BreakWeekRequest(BaseModel):
    date: str


class AddMatchRequest(BaseModel):
    week_number: Optional[int] = None
    match: MatchForm


class TableUpdateRequest(BaseModel):
    tables: Dict[int, int]


class TableUpdateResponse(BaseModel):
    updated: List[Venue]
    errors: List[str]
    tables_per_establishment: Dict[int, int]
    total_tables: int


class MatchOptionsResponse(BaseModel):
    home_options: List[SeasonParticipation]
    away_options: List[SeasonParticipation]
    venues: List[Venue]
    next_week_number: int


class DraftResponse(BaseModel):
    id: int
    season_id: int
    status: str
    is_manual: bool
    has_edits: bool
    configuration: ScheduleConfiguration
    break_dates: List[str]
    schedule: List[ScheduleWeek]
    server_warnings: List[ScheduleWarning]
    warnings: List[ScheduleWarning]
    warning_messages: List[str]
    warnings_headline: str
    structural_errors: List[str]
    estimate: ScheduleEstimate
    preview: SchedulePreview
    next_week_number: int
    matches_created: Optional[int] = None
    saved_at: Optional[datetime] = None


# ============================================================================
# Helper Functions
# ============================================================================


def _default_configuration(season: Season, teams: List[SeasonParticipation]) -> ScheduleConfiguration:
    return ScheduleConfiguration(
        start_date=(season.start_date or "")[:10],
        matches_per_week=default_matches_per_week(len(teams)),
    )


def _build_draft_response(draft: ScheduleDraft, expanded: bool = False) -> DraftResponse:
    config = draft.configuration
    weeks = draft.weeks
    teams = draft.teams
    venues = draft.venues

    warnings = compute_warnings(weeks, venues, draft.season_end_date)
    server_warnings = draft.warnings
    all_warnings = server_warnings + warnings

    return DraftResponse(
        id=draft.id,
        season_id=draft.season_id,
        status=draft.status,
        is_manual=draft.is_manual,
        has_edits=draft.has_edits,
        configuration=config,
        break_dates=break_dates(config.start_date, config.break_weeks),
        schedule=weeks,
        server_warnings=server_warnings,
        warnings=warnings,
        warning_messages=[format_warning(w) for w in all_warnings],
        warnings_headline=warnings_headline(len(all_warnings)),
        structural_errors=structural_errors(weeks),
        estimate=estimate_schedule(config, teams, venues, draft.season_end_date),
        preview=build_preview(weeks, is_manual=draft.is_manual, expanded=expanded),
        next_week_number=next_week_number(weeks),
        matches_created=draft.matches_created,
        saved_at=draft.saved_at,
    )


def _commit(session: Session, draft: ScheduleDraft) -> ScheduleDraft:
    draft.touch()
    session.add(draft)
    session.commit()
    session.refresh(draft)
    return draft


def _generate(league_api: LeagueApi, draft: ScheduleDraft, config: ScheduleConfiguration) -> None:
    """Ask the league API for a schedule and store it on the draft."""
    try:
        require_valid_configuration(config, len(draft.teams))
    except ScheduleConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        generated = league_api.seasons.generate_schedule(draft.season_id, config)
    except ApiError as e:
        raise api_error_to_http(e)

    draft.set_weeks(generated.schedule)
    draft.set_warnings(generated.warnings)
    draft.has_edits = False
    logger.info(
        f"Generated schedule for season {draft.season_id}: "
        f"{len(generated.schedule)} weeks, {len(generated.warnings)} warning(s)"
    )


# ============================================================================
# Scheduler context
# ============================================================================


@router.get("/seasons/{season_id}/scheduler", response_model=SchedulerContextResponse)
def get_scheduler_context(season_id: int, league_api: LeagueApi = Depends(get_league_api)):
    """Season, teams, venues, default configuration and estimates for the scheduler page."""
    try:
        season = league_api.seasons.get(season_id)
        teams = league_api.seasons.get_teams(season_id)
        venues = league_api.seasons.get_venues(season_id)
    except ApiError as e:
        raise api_error_to_http(e)

    config = _default_configuration(season, teams)
    config.tables_per_establishment = current_counts(venues)

    return SchedulerContextResponse(
        season=season,
        teams=teams,
        venues=venues,
        configuration=config,
        estimate=estimate_schedule(config, teams, venues, season.end_date),
        parameters=parameter_grid(config, teams, venues),
        round_robin_options=[
            RoundRobinOption(value=times, label=round_robin_label(times)) for times in TIMES_PLAY_EACH_OTHER_OPTIONS
        ],
    )


# ============================================================================
# Drafts
# ============================================================================


@router.post("/seasons/{season_id}/schedule/drafts", response_model=DraftResponse, status_code=201)
def create_draft(
    season_id: int,
    request: CreateDraftRequest,
    session: Session = Depends(get_session),
    league_api: LeagueApi = Depends(get_league_api),
):
    """
    Start a draft: generate a schedule, or start an empty manual schedule.

    Generating needs a start date and at least 2 teams.
    """
    try:
        season = league_api.seasons.get(season_id)
        teams = league_api.seasons.get_teams(season_id)
        venues = league_api.seasons.get_venues(season_id)
    except ApiError as e:
        raise api_error_to_http(e)

    config = request.configuration or _default_configuration(season, teams)
    if not config.tables_per_establishment:
        config.tables_per_establishment = current_counts(venues)

    draft = ScheduleDraft(
        season_id=season_id,
        is_manual=request.is_manual,
        season_end_date=(season.end_date or "")[:10] or None,
    )
    draft.set_configuration(config)
    draft.set_teams(teams)
    draft.set_venues(venues)

    if not request.is_manual:
        _generate(league_api, draft, config)

    draft = _commit(session, draft)
    logger.info(f"Created schedule draft {draft.id} for season {season_id} (manual={draft.is_manual})")
    return _build_draft_response(draft)


@router.get("/schedule/drafts/{draft_id}", response_model=DraftResponse)
def get_draft(
    draft_id: int,
    expanded: bool = Query(False, description="Show every week in the preview"),
    session: Session = Depends(get_session),
):
    return _build_draft_response(get_draft_or_404(session, draft_id), expanded=expanded)


@router.delete("/schedule/drafts/{draft_id}")
def discard_draft(draft_id: int, session: Session = Depends(get_session)):
    draft = get_draft_or_404(session, draft_id)
    session.delete(draft)
    session.commit()
    logger.info(f"Discarded schedule draft {draft_id}")
    return {"success": True, "draft_id": draft_id}


@router.post("/schedule/drafts/{draft_id}/regenerate", response_model=DraftResponse)
def regenerate_draft(
    draft_id: int,
    session: Session = Depends(get_session),
    league_api: LeagueApi = Depends(get_league_api),
):
    """Generate again with the current configuration; leaves manual mode."""
    draft = require_editable_draft(session, draft_id)
    draft.is_manual = False
    _generate(league_api, draft, draft.configuration)
    return _build_draft_response(_commit(session, draft))


# ============================================================================
# Configuration
# ============================================================================


def _apply_configuration(draft: ScheduleDraft, config: ScheduleConfiguration) -> None:
    """A generated schedule no longer matches a changed configuration and is cleared."""
    draft.set_configuration(config)
    if not draft.is_manual:
        draft.set_weeks([])
        draft.set_warnings([])
        draft.has_edits = False


@router.patch("/schedule/drafts/{draft_id}/configuration", response_model=DraftResponse)
def update_configuration(draft_id: int, update: ConfigurationUpdate, session: Session = Depends(get_session)):
    draft = require_editable_draft(session, draft_id)
    merged = {**draft.configuration.model_dump(mode="json"), **update.model_dump(exclude_unset=True)}
    try:
        config = ScheduleConfiguration.model_validate(merged)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=f"Invalid configuration: {e.error_count()} field error(s)")
    if update.break_weeks is not None:
        config.break_weeks = sorted(set(update.break_weeks))
    _apply_configuration(draft, config)
    return _build_draft_response(_commit(session, draft))


@router.post("/schedule/drafts/{draft_id}/break-weeks", response_model=DraftResponse)
def add_draft_break_week(draft_id: int, request: BreakWeekRequest, session: Session = Depends(get_session)):
    draft = require_editable_draft(session, draft_id)
    config = draft.configuration
    try:
        config.break_weeks = add_break_week(config.start_date, config.break_weeks, request.date)
    except BreakWeekError as e:
        raise HTTPException(status_code=400, detail=str(e))
    _apply_configuration(draft, config)
    return _build_draft_response(_commit(session, draft))


@router.delete("/schedule/drafts/{draft_id}/break-weeks/{index}", response_model=DraftResponse)
def remove_draft_break_week(draft_id: int, index: int, session: Session = Depends(get_session)):
    draft = require_editable_draft(session, draft_id)
    config = draft.configuration
    try:
        config.break_weeks = remove_break_week(config.break_weeks, index)
    except BreakWeekError as e:
        raise HTTPException(status_code=400, detail=str(e))
    _apply_configuration(draft, config)
    return _build_draft_response(_commit(session, draft))


# ============================================================================
# Match editing
# ============================================================================


@router.get("/schedule/drafts/{draft_id}/match-options", response_model=MatchOptionsResponse)
def get_match_options(
    draft_id: int,
    home_team_id: Optional[int] = None,
    away_team_id: Optional[int] = None,
    session: Session = Depends(get_session),
):
    """Selectable teams for each side of the match form."""
    draft = get_draft_or_404(session, draft_id)
    teams = draft.teams
    return MatchOptionsResponse(
        home_options=available_teams(teams, away_team_id),
        away_options=available_teams(teams, home_team_id),
        venues=draft.venues,
        next_week_number=next_week_number(draft.weeks),
    )


def _existing_match(weeks: List[ScheduleWeek], week_number: int, match_index: int):
    for week in weeks:
        if week.week_number == week_number and 0 <= match_index < len(week.matches):
            return week.matches[match_index]
    raise HTTPException(status_code=404, detail=f"Match {match_index} not found in week {week_number}")


@router.put("/schedule/drafts/{draft_id}/weeks/{week_number}/matches/{match_index}", response_model=DraftResponse)
def update_match(
    draft_id: int,
    week_number: int,
    match_index: int,
    form: MatchForm,
    session: Session = Depends(get_session),
):
    draft = require_editable_draft(session, draft_id)
    weeks = draft.weeks
    existing = _existing_match(weeks, week_number, match_index)
    try:
        match = build_match(form, draft.teams, draft.venues, existing=existing)
        weeks = replace_match(weeks, week_number, match_index, match)
    except ScheduleEditError as e:
        raise HTTPException(status_code=400, detail=str(e))

    draft.set_weeks(weeks)
    draft.has_edits = True
    return _build_draft_response(_commit(session, draft))


@router.post(
    "/schedule/drafts/{draft_id}/weeks/{week_number}/matches/{match_index}/swap", response_model=DraftResponse
)
def swap_match_sides(draft_id: int, week_number: int, match_index: int, session: Session = Depends(get_session)):
    draft = require_editable_draft(session, draft_id)
    weeks = draft.weeks
    existing = _existing_match(weeks, week_number, match_index)
    if existing.is_bye:
        raise HTTPException(status_code=400, detail="A bye has no home and away teams to swap")
    try:
        match = build_match(swap_home_away(form_from_match(existing)), draft.teams, draft.venues, existing=existing)
        weeks = replace_match(weeks, week_number, match_index, match)
    except ScheduleEditError as e:
        raise HTTPException(status_code=400, detail=str(e))

    draft.set_weeks(weeks)
    draft.has_edits = True
    return _build_draft_response(_commit(session, draft))


@router.delete(
    "/schedule/drafts/{draft_id}/weeks/{week_number}/matches/{match_index}", response_model=DraftResponse
)
def remove_match(draft_id: int, week_number: int, match_index: int, session: Session = Depends(get_session)):
    draft = require_editable_draft(session, draft_id)
    try:
        weeks = delete_match(draft.weeks, week_number, match_index)
    except ScheduleEditError as e:
        raise HTTPException(status_code=404, detail=str(e))

    draft.set_weeks(weeks)
    draft.has_edits = True
    return _build_draft_response(_commit(session, draft))


@router.post("/schedule/drafts/{draft_id}/matches", response_model=DraftResponse, status_code=201)
def create_match(draft_id: int, request: AddMatchRequest, session: Session = Depends(get_session)):
    """Add a match; without week_number it goes into a new week after the last one."""
    draft = require_editable_draft(session, draft_id)
    weeks = draft.weeks
    week_number = request.week_number or next_week_number(weeks)
    try:
        match = build_match(request.match, draft.teams, draft.venues)
        weeks = add_match(weeks, week_number, match, week_date=date_for_week(draft.configuration.start_date, week_number))
    except ScheduleEditError as e:
        raise HTTPException(status_code=400, detail=str(e))

    draft.set_weeks(weeks)
    draft.has_edits = True
    return _build_draft_response(_commit(session, draft))


@router.delete("/schedule/drafts/{draft_id}/warnings", response_model=DraftResponse)
def dismiss_warnings(draft_id: int, session: Session = Depends(get_session)):
    """Dismiss the warnings returned by the generator."""
    draft = require_editable_draft(session, draft_id)
    draft.set_warnings([])
    return _build_draft_response(_commit(session, draft))


# ============================================================================
# Venue tables
# ============================================================================


@router.patch("/schedule/drafts/{draft_id}/venues/tables", response_model=TableUpdateResponse)
def update_venue_tables(
    draft_id: int,
    request: TableUpdateRequest,
    session: Session = Depends(get_session),
    league_api: LeagueApi = Depends(get_league_api),
):
    draft = require_editable_draft(session, draft_id)
    venues = draft.venues
    result = apply_table_changes(league_api.seasons, venues, request.tables)

    updated_by_id = {venue.id: venue for venue in result.updated}
    venues = [updated_by_id.get(venue.id, venue) for venue in venues]
    draft.set_venues(venues)

    config = draft.configuration
    config.tables_per_establishment = current_counts(venues)
    draft.set_configuration(config)
    _commit(session, draft)

    return TableUpdateResponse(
        updated=result.updated,
        errors=result.errors,
        tables_per_establishment=config.tables_per_establishment,
        total_tables=total_tables(venues),
    )


# ============================================================================
# Save
# ============================================================================


@router.post("/schedule/drafts/{draft_id}/save", response_model=DraftResponse)
def save_draft(
    draft_id: int,
    session: Session = Depends(get_session),
    league_api: LeagueApi = Depends(get_league_api),
):
    """
    Save the schedule to the league API, which creates the matches.

    Refuses empty schedules and schedules with structural errors. The draft
    is kept with status "saved".
    """
    draft = require_editable_draft(session, draft_id)
    weeks = draft.weeks

    if not weeks:
        raise HTTPException(status_code=400, detail="No schedule to save")

    errors = structural_errors(weeks)
    if errors:
        raise HTTPException(status_code=400, detail=f"Schedule has errors: {'; '.join(errors)}")

    request = SaveScheduleRequest(schedule=weeks, configuration=draft.configuration, is_manual=draft.is_manual)
    try:
        result = league_api.seasons.save_schedule(draft.season_id, request)
    except ApiError as e:
        raise api_error_to_http(e)

    if not result.success:
        raise HTTPException(status_code=502, detail="League API did not save the schedule")

    draft.status = "saved"
    draft.matches_created = result.matches_created
    draft.saved_at = datetime.now(timezone.utc)
    draft = _commit(session, draft)
    logger.info(f"Saved schedule draft {draft_id}: {result.matches_created} matches created")
    return _build_draft_response(draft)
