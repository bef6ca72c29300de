"""
Season endpoints

Besides season CRUD this covers the schedule workflow calls:
generate_schedule (preview only, nothing is stored server-side) and
save_schedule (server validates every constraint before creating matches).
"""

from typing import Any, List, Optional

from leaguedesk.api.base import ResourceApi, to_payload
from leaguedesk.api.types import (
    GeneratedScheduleResponse,
    Match,
    PaginatedResponse,
    SaveScheduleRequest,
    SaveScheduleResponse,
    ScheduleConfiguration,
    Season,
    SeasonParticipation,
    SeasonPlayersResponse,
    SeasonStandingsResponse,
    Venue,
)


class SeasonsApi(ResourceApi):
    def get_all(self) -> PaginatedResponse[Season]:
        return self._parse(PaginatedResponse[Season], self.client.get("/seasons/"))

    def get(self, season_id: int) -> Season:
        return self._parse(Season, self.client.get(f"/seasons/{season_id}/"))

    def create(self, data: Any) -> Season:
        """Create a season (league operators only)."""
        return self._parse(Season, self.client.post("/seasons/", to_payload(data)))

    def update(self, season_id: int, data: Any) -> Season:
        return self._parse(Season, self.client.patch(f"/seasons/{season_id}/", to_payload(data)))

    def get_teams(self, season_id: int) -> List[SeasonParticipation]:
        return self._parse_list(SeasonParticipation, self.client.get(f"/seasons/{season_id}/teams/"))

    def get_matches(self, season_id: int) -> List[Match]:
        return self._parse_list(Match, self.client.get(f"/seasons/{season_id}/matches/"))

    def join_with_code(self, season_id: int, invite_code: str, team_id: int) -> SeasonParticipation:
        data = {"invite_code": invite_code, "team_id": team_id}
        return self._parse(SeasonParticipation, self.client.post(f"/seasons/{season_id}/join_with_code/", data))

    def get_standings(self, season_id: int) -> SeasonStandingsResponse:
        return self._parse(SeasonStandingsResponse, self.client.get(f"/seasons/{season_id}/standings/"))

    def get_players(self, season_id: int) -> SeasonPlayersResponse:
        return self._parse(SeasonPlayersResponse, self.client.get(f"/seasons/{season_id}/players/"))

    def get_venues(self, season_id: int) -> List[Venue]:
        """Venues of the season's league."""
        return self._parse_list(Venue, self.client.get(f"/seasons/{season_id}/venues/"))

    def generate_schedule(self, season_id: int, config: ScheduleConfiguration) -> GeneratedScheduleResponse:
        data = self.client.post(f"/seasons/{season_id}/generate-schedule/", config.model_dump(mode="json"))
        return self._parse(GeneratedScheduleResponse, data)

    def save_schedule(self, season_id: int, request: SaveScheduleRequest) -> SaveScheduleResponse:
        data = self.client.post(f"/seasons/{season_id}/save-schedule/", request.model_dump(mode="json"))
        return self._parse(SaveScheduleResponse, data)

    def update_venue(self, venue_id: int, data: Any) -> Venue:
        """Update name, address, table_count or is_active of a venue."""
        return self._parse(Venue, self.client.patch(f"/venues/{venue_id}/", to_payload(data)))

    def create_venue(self, league_id: int, name: str, table_count: int, address: Optional[str] = None) -> Venue:
        data = {"league": league_id, "name": name, "table_count": table_count}
        if address:
            data["address"] = address
        return self._parse(Venue, self.client.post("/venues/", data))
