from typing import Optional

from leaguedesk.api.auth import TokenRefresher, refresh_access_token
from leaguedesk.api.captain_requests import CaptainRequestsApi
from leaguedesk.api.client import ApiClient, ApiError, get_api_base_url
from leaguedesk.api.leagues import LeaguesApi
from leaguedesk.api.matches import MatchesApi
from leaguedesk.api.me import MeApi
from leaguedesk.api.players import PlayersApi
from leaguedesk.api.seasons import SeasonsApi
from leaguedesk.api.stats import StatsApi
from leaguedesk.api.teams import TeamsApi


class LeagueApi:
    """All resource wrappers bound to one ApiClient."""

    def __init__(self, client: Optional[ApiClient] = None):
        self.client = client or ApiClient()
        self.leagues = LeaguesApi(self.client)
        self.seasons = SeasonsApi(self.client)
        self.teams = TeamsApi(self.client)
        self.players = PlayersApi(self.client)
        self.matches = MatchesApi(self.client)
        self.stats = StatsApi(self.client)
        self.me = MeApi(self.client)
        self.captain_requests = CaptainRequestsApi(self.client)


__all__ = [
    "ApiClient",
    "ApiError",
    "LeagueApi",
    "TokenRefresher",
    "get_api_base_url",
    "refresh_access_token",
]
