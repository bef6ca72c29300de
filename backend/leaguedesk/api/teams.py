"""Team endpoints: roster, captains and season participation."""

from typing import Any, List

from leaguedesk.api.base import ResourceApi, to_payload
from leaguedesk.api.types import (
    CaptainRequest,
    PaginatedResponse,
    SeasonParticipation,
    Team,
    TeamMembership,
    TeamRegistrationData,
    TeamSeasonStats,
)


class TeamsApi(ResourceApi):
    def get_all(self) -> PaginatedResponse[Team]:
        return self._parse(PaginatedResponse[Team], self.client.get("/teams/"))

    def get(self, team_id: int) -> Team:
        return self._parse(Team, self.client.get(f"/teams/{team_id}/"))

    def create(self, data: TeamRegistrationData) -> Team:
        """Register a team. Captains are added afterwards with add_captain."""
        return self._parse(Team, self.client.post("/teams/", to_payload(data)))

    def update(self, team_id: int, data: Any) -> Team:
        return self._parse(Team, self.client.patch(f"/teams/{team_id}/", to_payload(data)))

    def get_roster(self, team_id: int) -> List[TeamMembership]:
        return self._parse_list(TeamMembership, self.client.get(f"/teams/{team_id}/roster/"))

    def add_member(self, team_id: int, player_id: int) -> TeamMembership:
        data = self.client.post(f"/teams/{team_id}/add_member/", {"player_id": player_id})
        return self._parse(TeamMembership, data)

    def add_captain(self, team_id: int, player_id: int) -> Team:
        return self._parse(Team, self.client.post(f"/teams/{team_id}/add_captain/", {"player_id": player_id}))

    def transfer_captain(self, team_id: int, new_captain_id: int) -> Team:
        data = self.client.post(f"/teams/{team_id}/transfer_captain/", {"new_captain_id": new_captain_id})
        return self._parse(Team, data)

    def remove_captain(self, team_id: int, player_id: int) -> Team:
        return self._parse(Team, self.client.post(f"/teams/{team_id}/remove_captain/", {"player_id": player_id}))

    def get_captain_requests(self, team_id: int) -> List[CaptainRequest]:
        return self._parse_list(CaptainRequest, self.client.get(f"/teams/{team_id}/captain_requests/"))

    def get_season_stats(self, team_id: int, season_id: int) -> TeamSeasonStats:
        data = self.client.get(f"/teams/{team_id}/season_stats/", params={"season_id": season_id})
        return self._parse(TeamSeasonStats, data)

    def get_seasons(self, team_id: int) -> List[SeasonParticipation]:
        return self._parse_list(SeasonParticipation, self.client.get(f"/teams/{team_id}/seasons/"))
