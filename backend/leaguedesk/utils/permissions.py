"""
Permission checks for league resources

Operators manage everything in their leagues; captains manage matches of
their own teams.
"""

from typing import Optional, Sequence

from leaguedesk.api.types import League, Match, Player


def is_league_operator(my_leagues: Sequence[League], league_id: Optional[int] = None) -> bool:
    """my_leagues are the leagues the user operates. Without league_id: operator of any."""
    if not my_leagues:
        return False
    if not league_id:
        return True
    return any(league.id == league_id for league in my_leagues)


def is_team_captain(player: Optional[Player], team_id: int) -> bool:
    if player is None or not player.captain_of_teams:
        return False
    return any(ct.team_id == team_id for ct in player.captain_of_teams)


def can_edit_match(
    match: Match,
    player: Optional[Player],
    my_leagues: Sequence[League],
    league_id: Optional[int] = None,
) -> bool:
    """Operators of the match's league, or captains of either team."""
    if league_id and is_league_operator(my_leagues, league_id):
        return True

    if player is not None and player.captain_of_teams:
        captain_team_ids = {ct.team_id for ct in player.captain_of_teams}
        return match.home_team in captain_team_ids or match.away_team in captain_team_ids

    return False
