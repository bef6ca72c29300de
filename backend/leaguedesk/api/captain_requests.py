"""Captain request endpoints."""

from typing import Optional

from leaguedesk.api.base import ResourceApi
from leaguedesk.api.types import CaptainRequest, PaginatedResponse


class CaptainRequestsApi(ResourceApi):
    def get_all(self) -> PaginatedResponse[CaptainRequest]:
        return self._parse(PaginatedResponse[CaptainRequest], self.client.get("/captain-requests/"))

    def get(self, request_id: int) -> CaptainRequest:
        return self._parse(CaptainRequest, self.client.get(f"/captain-requests/{request_id}/"))

    def create(self, team_id: int, player_id: int, message: Optional[str] = None) -> CaptainRequest:
        data = {"team": team_id, "player": player_id}
        if message:
            data["message"] = message
        return self._parse(CaptainRequest, self.client.post("/captain-requests/", data))

    def approve(self, request_id: int) -> CaptainRequest:
        """Approve a request (captains only)."""
        return self._parse(CaptainRequest, self.client.post(f"/captain-requests/{request_id}/approve/", {}))

    def deny(self, request_id: int) -> CaptainRequest:
        return self._parse(CaptainRequest, self.client.post(f"/captain-requests/{request_id}/deny/", {}))
