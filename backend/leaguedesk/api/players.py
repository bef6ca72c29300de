"""Player endpoints."""

from typing import Any, List

from leaguedesk.api.base import ResourceApi, to_payload
from leaguedesk.api.types import CaptainRequest, PaginatedResponse, Player, Team


class PlayersApi(ResourceApi):
    def get_all(self) -> PaginatedResponse[Player]:
        return self._parse(PaginatedResponse[Player], self.client.get("/players/"))

    def get(self, player_id: int) -> Player:
        return self._parse(Player, self.client.get(f"/players/{player_id}/"))

    def get_current_user(self) -> Player:
        return self._parse(Player, self.client.get("/players/current_user/"))

    def get_current_teams(self) -> List[Team]:
        return self._parse_list(Team, self.client.get("/players/current_teams/"))

    def get_current_user_captain_requests(self) -> List[CaptainRequest]:
        return self._parse_list(CaptainRequest, self.client.get("/players/current_user_captain_requests/"))

    def get_player_teams(self, player_id: int) -> List[Team]:
        return self._parse_list(Team, self.client.get(f"/players/{player_id}/teams/"))

    def create(self, data: Any) -> Player:
        return self._parse(Player, self.client.post("/players/", to_payload(data)))

    def update(self, player_id: int, data: Any) -> Player:
        return self._parse(Player, self.client.patch(f"/players/{player_id}/", to_payload(data)))
