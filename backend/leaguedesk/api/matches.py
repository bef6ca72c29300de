"""Match endpoints."""

from typing import Any

from leaguedesk.api.base import ResourceApi, to_payload
from leaguedesk.api.types import Match, MatchScoreSubmission, PaginatedResponse


class MatchesApi(ResourceApi):
    def get_all(self) -> PaginatedResponse[Match]:
        return self._parse(PaginatedResponse[Match], self.client.get("/matches/"))

    def get(self, match_id: int) -> Match:
        return self._parse(Match, self.client.get(f"/matches/{match_id}/"))

    def create(self, data: Any) -> Match:
        return self._parse(Match, self.client.post("/matches/", to_payload(data)))

    def update(self, match_id: int, data: Any) -> Match:
        return self._parse(Match, self.client.patch(f"/matches/{match_id}/", to_payload(data)))

    def submit_score(self, match_id: int, scores: MatchScoreSubmission) -> Match:
        """Submit a final score (team staff only)."""
        return self._parse(Match, self.client.post(f"/matches/{match_id}/submit_score/", to_payload(scores)))

    def submit_match(self, data: Any) -> Match:
        """Submit a complete match including per-game data."""
        return self._parse(Match, self.client.post("/matches/submit_match/", to_payload(data)))
