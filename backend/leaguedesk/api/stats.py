from leaguedesk.api.base import ResourceApi
from leaguedesk.api.types import LeagueStats


class StatsApi(ResourceApi):
    def get_league_stats(self) -> LeagueStats:
        return self._parse(LeagueStats, self.client.get("/stats/league/"))
