"""League endpoints."""

from typing import Any

from leaguedesk.api.base import ResourceApi, to_payload
from leaguedesk.api.types import League, PaginatedResponse


class LeaguesApi(ResourceApi):
    def get_all(self) -> PaginatedResponse[League]:
        return self._parse(PaginatedResponse[League], self.client.get("/leagues/"))

    def get(self, league_id: int) -> League:
        return self._parse(League, self.client.get(f"/leagues/{league_id}/"))

    def create(self, data: Any) -> League:
        return self._parse(League, self.client.post("/leagues/", to_payload(data)))

    def update(self, league_id: int, data: Any) -> League:
        return self._parse(League, self.client.patch(f"/leagues/{league_id}/", to_payload(data)))

    def delete(self, league_id: int) -> None:
        self.client.delete(f"/leagues/{league_id}/")
