from leaguedesk.api.base import ResourceApi
from leaguedesk.api.types import MeResponse


class MeApi(ResourceApi):
    def get_me(self) -> MeResponse:
        """Player, teams, seasons and leagues of the current user in one call."""
        return self._parse(MeResponse, self.client.get("/me/"))
