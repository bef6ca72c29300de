from leaguedesk.api.types import CaptainOf, League, Match, Player
from leaguedesk.utils.permissions import can_edit_match, is_league_operator, is_team_captain

LEAGUES = [League(id=1, name="Tuesday"), League(id=2, name="Thursday")]
CAPTAIN = Player(
    id=9,
    full_name="Pat Doe",
    captain_of_teams=[CaptainOf(team_id=5, team_name="Sharks", appointed_at="2026-01-01")],
)
MATCH = Match(id=1, season=3, home_team=5, away_team=6, date="2026-03-02")


def test_is_league_operator():
    assert is_league_operator(LEAGUES)
    assert is_league_operator(LEAGUES, 2)
    assert not is_league_operator(LEAGUES, 3)
    assert not is_league_operator([], 1)


def test_is_team_captain():
    assert is_team_captain(CAPTAIN, 5)
    assert not is_team_captain(CAPTAIN, 6)
    assert not is_team_captain(None, 5)


def test_can_edit_match_as_operator():
    assert can_edit_match(MATCH, None, LEAGUES, league_id=1)
    assert not can_edit_match(MATCH, None, LEAGUES)


def test_can_edit_match_as_captain():
    assert can_edit_match(MATCH, CAPTAIN, [])
    other = MATCH.model_copy(update={"home_team": 7, "away_team": 8})
    assert not can_edit_match(other, CAPTAIN, [])
