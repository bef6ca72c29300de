from typing import List

from fastapi import APIRouter, Depends

from leaguedesk.api import ApiError, LeagueApi
from leaguedesk.api.types import Match, Season, SeasonPlayersResponse, SeasonStandingsResponse, Venue
from leaguedesk.dependencies import api_error_to_http, get_league_api

router = APIRouter()


# ============================================================================
# Read-through season endpoints
# ============================================================================


@router.get("/seasons/{season_id}", response_model=Season)
def get_season(season_id: int, league_api: LeagueApi = Depends(get_league_api)):
    try:
        return league_api.seasons.get(season_id)
    except ApiError as e:
        raise api_error_to_http(e)


@router.get("/seasons/{season_id}/standings", response_model=SeasonStandingsResponse)
def get_season_standings(season_id: int, league_api: LeagueApi = Depends(get_league_api)):
    try:
        return league_api.seasons.get_standings(season_id)
    except ApiError as e:
        raise api_error_to_http(e)


@router.get("/seasons/{season_id}/players", response_model=SeasonPlayersResponse)
def get_season_players(season_id: int, league_api: LeagueApi = Depends(get_league_api)):
    try:
        return league_api.seasons.get_players(season_id)
    except ApiError as e:
        raise api_error_to_http(e)


@router.get("/seasons/{season_id}/venues", response_model=List[Venue])
def get_season_venues(season_id: int, league_api: LeagueApi = Depends(get_league_api)):
    try:
        return league_api.seasons.get_venues(season_id)
    except ApiError as e:
        raise api_error_to_http(e)


@router.get("/seasons/{season_id}/matches", response_model=List[Match])
def get_season_matches(season_id: int, league_api: LeagueApi = Depends(get_league_api)):
    try:
        return league_api.seasons.get_matches(season_id)
    except ApiError as e:
        raise api_error_to_http(e)
